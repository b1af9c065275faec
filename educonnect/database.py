# educonnect/database.py - Storage wiring
from fastapi import Request

from educonnect.storage import MemStorage


# Dependency to get the storage instance created by create_app()
def get_storage(request: Request) -> MemStorage:
    return request.app.state.storage
