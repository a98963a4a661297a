"""
Health check route to verify service and database connectivity.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import asyncio
from typing import Any, Dict

from fastapi import APIRouter

from api.routes.exception import handle_exceptions
from config import HEALTH_PATH
from database import connection_test

router = APIRouter(tags=["Health"])


@router.get(HEALTH_PATH)
@handle_exceptions
async def health() -> Dict[str, Any]:
    db_ok = await asyncio.to_thread(connection_test)
    return {
        "status": "ok",
        "database": "up" if db_ok else "down",
    }
