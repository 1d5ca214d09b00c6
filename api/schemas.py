"""
api/schemas.py
--------------
Request bodies accepted by the API.
"""

from typing import Optional

from pydantic import BaseModel


class AuthInput(BaseModel):
    email: str
    password: str
    role: bool = False


class SignInInput(BaseModel):
    email: str
    password: str
    role: Optional[bool] = None


class IdInput(BaseModel):
    id: str


class UpdateUserInput(BaseModel):
    id: str
    email: Optional[str] = None
    password: Optional[str] = None


class CreateCourseInput(BaseModel):
    name: str
    url: str
    text: str


class UpdateCourseInput(BaseModel):
    id: str
    name: Optional[str] = None
    url: Optional[str] = None
    text: Optional[str] = None
