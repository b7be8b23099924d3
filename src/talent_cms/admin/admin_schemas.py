"""Pydantic schemas for admin dashboard endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, StrictBool, StrictInt


class AdminLoginRequest(BaseModel):
    username: str
    password: str


class BlockRequest(BaseModel):
    userId: StrictInt
    block: StrictBool


class SuspendRequest(BaseModel):
    userId: StrictInt
    suspendedFrom: datetime
    suspendedTo: datetime


class UnsuspendRequest(BaseModel):
    userId: StrictInt


class PlanChangeRequest(BaseModel):
    userId: StrictInt
    newPlan: str
