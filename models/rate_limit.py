"""
Per-client request log used for rate limiting (e.g. max 5 logins per 15 minutes).
client_ip holds the counting key: the IP, or IP plus account id for the general quota.
"""
from models import db, utcnow


class RequestLog(db.Model):
    __tablename__ = 'request_log'

    id = db.Column(db.Integer, primary_key=True)
    scope = db.Column(db.String(32), nullable=False)
    client_ip = db.Column(db.String(64), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    __table_args__ = (
        db.Index('ix_request_log_scope_ip_created', 'scope', 'client_ip', 'created_at'),
    )
