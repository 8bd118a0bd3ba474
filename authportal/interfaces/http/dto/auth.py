# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

from authportal.domain.users.entities import LoginInput, RegisterInput


class _FormDTO(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=False)

    @field_validator("*", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return "" if value is None else value


class RegisterFormDTO(_FormDTO):
    username: str = ""
    email: str = ""
    password: str = ""
    password_confirm: str = ""

    def to_input(self) -> RegisterInput:
        return RegisterInput(
            username=self.username,
            email=self.email,
            password=self.password,
            password_confirm=self.password_confirm,
        )


class LoginFormDTO(_FormDTO):
    identifier: str = ""
    password: str = ""

    def to_input(self) -> LoginInput:
        return LoginInput(identifier=self.identifier, password=self.password)
