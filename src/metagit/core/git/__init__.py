"""Git operations subpackage.

This subpackage provides the status provider abstraction with support for
testing via fakes.
"""

from metagit.core.git.abc import Git
from metagit.core.git.parsing import parse_porcelain_status, status_code_to_flags
from metagit.core.git.real import RealGit

__all__ = [
    "Git",
    "RealGit",
    "parse_porcelain_status",
    "status_code_to_flags",
]
