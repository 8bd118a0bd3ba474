# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class User:

    id: int
    username: str
    email: str
    password_hash: str


@dataclass(slots=True, frozen=True)
class RegisterInput:

    username: str
    email: str
    password: str
    password_confirm: str


@dataclass(slots=True, frozen=True)
class LoginInput:

    identifier: str
    password: str
