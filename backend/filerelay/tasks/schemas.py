"""Pydantic schemas for the task echo endpoint."""
from pydantic import BaseModel


class TaskRequest(BaseModel):
    """A task request decoded from a JSON body. Never persisted."""
    name: str = ""
