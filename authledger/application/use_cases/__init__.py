from .accounts import DeleteAccountUseCase, RegisterAccountUseCase
from .sessions import LogoutUseCase, VerifyAndIssueUseCase

__all__ = [
    "DeleteAccountUseCase",
    "LogoutUseCase",
    "RegisterAccountUseCase",
    "VerifyAndIssueUseCase",
]
