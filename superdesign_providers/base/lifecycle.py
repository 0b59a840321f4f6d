"""Initialization state machine support.

States
------
``UNINITIALIZED`` → ``INITIALIZING`` → ``READY``. A failed attempt is
logged and routes straight back to ``UNINITIALIZED``; there is no sticky
failure state, so the next caller starts a fresh attempt.

The provider owns the single in-flight task handle; this module holds the
state enum and the working-directory fallback chain, which never raises.
"""
from __future__ import annotations

import logging
import os
import tempfile
from enum import Enum

from ..config.defaults import TEMP_DIR_PREFIX, WORKSPACE_DIR_NAME
from .host import WorkspaceResolver
from .logging import LogContext, log_event


class InitState(str, Enum):
    """Provider readiness states."""

    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"


def resolve_working_directory(
    workspace: WorkspaceResolver,
    provider_key: str,
    logger: logging.Logger,
    ctx: LogContext | None = None,
) -> str:
    """Pick and create the provider working directory.

    Order:
        1. ``<project root>/.superdesign`` when a project root is available.
        2. ``<system temp>/superdesign-<provider_key>`` otherwise.
        3. The process's current directory if either step raised.

    ``ensure_directory`` is called once per invocation.
    """
    try:
        root = workspace.current_project_root()
        if root:
            target = os.path.join(root, WORKSPACE_DIR_NAME)
        else:
            log_event(logger, "init.workspace", ctx, level=logging.WARNING,
                      message="No workspace root found, using temporary directory")
            target = os.path.join(tempfile.gettempdir(), f"{TEMP_DIR_PREFIX}{provider_key}")
        workspace.ensure_directory(target)
        log_event(logger, "init.workspace", ctx, directory=target)
        return target
    except Exception as exc:  # any resolver/filesystem failure degrades to cwd
        fallback = os.getcwd()
        log_event(logger, "init.workspace", ctx, level=logging.ERROR,
                  message=f"Failed to setup working directory: {exc}", directory=fallback)
        return fallback


__all__ = ["InitState", "resolve_working_directory"]
