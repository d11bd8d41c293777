"""
cPanel / Passenger WSGI entry point.
Passenger looks for 'application' in this file.
"""
import sys
import os

# Add project directory to path so 'wsgi' can be imported
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from wsgi import application
