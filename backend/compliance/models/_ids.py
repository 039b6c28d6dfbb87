import uuid


def new_id() -> str:
    """Primary keys are UUID4 strings so ids never leak row counts across tenants."""
    return str(uuid.uuid4())
