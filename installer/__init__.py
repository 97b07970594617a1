"""Skill installation: file operations, validation and rollback."""

from .file_ops import CopyOptions, FileOperations
from .installer import InstallOptions, InstallResult, SkillError, SkillInstaller
from .rollback import RollbackManager, RollbackState
from .validator import SkillValidator, ValidationIssue, ValidationResult

__all__ = [
    "CopyOptions",
    "FileOperations",
    "InstallOptions",
    "InstallResult",
    "RollbackManager",
    "RollbackState",
    "SkillError",
    "SkillInstaller",
    "SkillValidator",
    "ValidationIssue",
    "ValidationResult",
]
