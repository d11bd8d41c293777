"""
Helpers shared by routes: auth, validation, mail, uploads, rate limits
"""
