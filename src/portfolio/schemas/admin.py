from typing import Annotated

from pydantic import StringConstraints

from .base import Email, InputSchema, ListQuery, PersonName, ReadSchema

RegisterPassword = Annotated[str, StringConstraints(min_length=8, max_length=20)]
LoginPassword = Annotated[str, StringConstraints(min_length=8, max_length=50)]


class AdminCreate(InputSchema):
    username: PersonName
    email: Email
    password: RegisterPassword


class AdminUpdate(InputSchema):
    username: PersonName | None = None
    email: Email | None = None
    password: RegisterPassword | None = None


class AdminLogin(InputSchema):
    username: PersonName
    password: LoginPassword


class AdminRead(ReadSchema):
    """Never carries the password hash."""

    username: str
    email: str


class AdminQuery(ListQuery):
    pass
