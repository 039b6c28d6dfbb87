"""Auditing bounded context: templates, audits, responses and scoring."""
