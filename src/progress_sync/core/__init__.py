"""Core: modelos, sesión y reconciliación."""

from .coordinator import SyncCoordinator
from .models import DEFAULT_FOLDER, WILDCARD, ProgressCounter, ProgressRecord, StarRecord
from .progress import MergeReport, MergeStatus
from .result import Expired, MissingCredential, Ok, OtherFailure, RemoteResult, RetryExhausted
from .session import CredentialState, LoginState, UserProfile, UserSettings

__all__ = [
    "SyncCoordinator",
    "DEFAULT_FOLDER",
    "WILDCARD",
    "ProgressCounter",
    "ProgressRecord",
    "StarRecord",
    "MergeReport",
    "MergeStatus",
    "Ok",
    "Expired",
    "MissingCredential",
    "OtherFailure",
    "RetryExhausted",
    "RemoteResult",
    "CredentialState",
    "LoginState",
    "UserProfile",
    "UserSettings",
]
