"""Database models"""
from .audit_template import AuditTemplate, TemplateSection, TemplateQuestion
from .audit import Audit, AuditResponse

__all__ = [
    "AuditTemplate",
    "TemplateSection",
    "TemplateQuestion",
    "Audit",
    "AuditResponse",
]
