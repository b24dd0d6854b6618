# -*- coding: utf-8 -*-
"""
User schemas

Public API:
- `UserSchema`
"""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel


class UserSchema(BaseModel):
    id: uuid.UUID
    name: str
    created_at: datetime

    model_config = {"from_attributes": True}
