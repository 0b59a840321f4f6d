"""Shared implementation of HTTP API backed providers.

``ApiProvider`` implements the whole query lifecycle once:

- a memoized, re-armable initialization attempt (``InitState`` plus one
  task handle) that resolves a working directory and publishes the
  credential to the session holder;
- the query flow: await readiness, build the backend payload, issue one
  HTTP call raced against the caller's cancellation token, normalize the
  reply, push it to the streaming callback;
- the failure classifier (cancellation, then auth keywords, then
  everything else with a user notification);
- credential refresh.

Concrete backends supply class attributes (identity, setting names,
defaults, auth keywords, normalizer) and ``build_request``.
"""
from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Tuple, Type, Union

import httpx

from ..config import SettingsStore
from ..config.defaults import SETTINGS_SCOPE
from ..config.env import get_session_variable
from .cancellation import CancellationToken, CancelledError
from .constants import (
    CANCELLED_MESSAGE_TEMPLATE,
    CONFIGURE_COMMAND_TEMPLATE,
    HTTP_PURPOSE_QUERY,
    PROVIDER_TYPE_API,
)
from .credentials import SessionCredentials
from .errors import (
    AuthError,
    ConfigurationError,
    TransportError,
    classify_exception,
    is_auth_message,
)
from .host import (
    CredentialStore,
    LocalWorkspace,
    LogNotifier,
    Notifier,
    StreamCallback,
    WorkspaceResolver,
)
from .http import get_async_client
from .interfaces import ProviderType
from .lifecycle import InitState, resolve_working_directory
from .logging import LogContext, get_logger, log_event
from .models import CanonicalMessage, QueryOptions, Turn
from .normalizer import ResponseNormalizer
from .request import HttpRequestSpec, build_turns


def _consume_task_exception(task: "asyncio.Task[None]") -> None:
    # failures are logged and re-raised to awaiting callers; an eager attempt
    # nobody awaited must not trigger "exception was never retrieved"
    if not task.cancelled():
        task.exception()


class ApiProvider(ABC):
    """Base class for providers that talk to a hosted HTTP API.

    Parameters
    ----------
    settings:
        Credential/settings store; defaults to a fresh :class:`SettingsStore`.
    workspace:
        Working-directory resolver; defaults to :class:`LocalWorkspace` with
        no project root.
    notifier:
        User-facing error surface; defaults to :class:`LogNotifier`.
    credentials:
        Session credential holder shared across the host's providers.
    http_client:
        Explicit ``httpx.AsyncClient``; when omitted a pooled client is used
        (or a private one when ``timeout_seconds`` is given).
    logger:
        Logger for structured events.
    scope:
        Settings scope key.
    base_url:
        Backend host override.
    timeout_seconds:
        Per-request timeout for a private client.
    headers:
        Extra static headers (backend headers win on conflicts).
    extra:
        Free-form adapter-specific values.

    Initialization is scheduled immediately when constructed inside a
    running event loop, but never awaited here.
    """

    provider_key: ClassVar[str]
    display_name: ClassVar[str]
    backend_label: ClassVar[str]
    api_key_setting: ClassVar[str]
    model_setting: ClassVar[str]
    default_model: ClassVar[str]
    default_base_url: ClassVar[str]
    auth_keywords: ClassVar[Tuple[str, ...]]
    normalizer_class: ClassVar[Type[ResponseNormalizer]]

    def __init__(
        self,
        *,
        settings: Optional[CredentialStore] = None,
        workspace: Optional[WorkspaceResolver] = None,
        notifier: Optional[Notifier] = None,
        credentials: Optional[SessionCredentials] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        logger: Optional[logging.Logger] = None,
        scope: str = SETTINGS_SCOPE,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        headers: Optional[Mapping[str, str]] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._settings: CredentialStore = settings if settings is not None else SettingsStore()
        self._workspace: WorkspaceResolver = workspace if workspace is not None else LocalWorkspace()
        self._notifier: Notifier = notifier if notifier is not None else LogNotifier()
        self._credentials = credentials if credentials is not None else SessionCredentials()
        self._http_client = http_client
        self._owned_client: Optional[httpx.AsyncClient] = None
        self._logger = logger or get_logger(f"superdesign_providers.{self.provider_key}")
        self._scope = scope
        self._base_url = (base_url or self.default_base_url).rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._extra_headers = dict(headers or {})
        self.extra = dict(extra or {})
        self._normalizer = self.normalizer_class()

        self._state = InitState.UNINITIALIZED
        self._init_task: Optional[asyncio.Task[None]] = None
        self._working_directory = ""

        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return
        self._start_initialization()

    # ---- identity ----
    def get_provider_name(self) -> str:
        return self.display_name

    def get_provider_type(self) -> ProviderType:
        return PROVIDER_TYPE_API

    def get_working_directory(self) -> str:
        return self._working_directory

    @property
    def state(self) -> InitState:
        return self._state

    @property
    def session_variable(self) -> str:
        """Session credential variable this backend publishes under."""
        return get_session_variable(self.provider_key) or f"{self.provider_key.upper()}_API_KEY"

    @property
    def base_url(self) -> str:
        return self._base_url

    # ---- settings ----
    def _read_setting(self, name: str) -> Optional[str]:
        raw = self._settings.get(self._scope, name)
        if raw is None:
            return None
        trimmed = raw.strip()
        return trimmed or None

    def _get_api_key(self) -> Optional[str]:
        return self._read_setting(self.api_key_setting)

    def get_model_id(self) -> str:
        """Configured model id, or the backend default when unset/blank."""
        return self._read_setting(self.model_setting) or self.default_model

    def has_valid_configuration(self) -> bool:
        return self._get_api_key() is not None

    def _ctx(self, model: Optional[str] = None) -> LogContext:
        return LogContext(provider=self.provider_key, model=model)

    # ---- initialization state machine ----
    def is_ready(self) -> bool:
        return self._state is InitState.READY

    def _start_initialization(self) -> "asyncio.Task[None]":
        task = asyncio.ensure_future(self._run_initialization())
        task.add_done_callback(_consume_task_exception)
        self._init_task = task
        self._state = InitState.INITIALIZING
        return task

    async def initialize(self) -> None:
        """Run or join the single initialization attempt.

        Concurrent callers share one task. ``asyncio.shield`` keeps a
        cancelled caller from cancelling the attempt the others await.
        """
        if self._state is InitState.READY:
            return
        task = self._init_task or self._start_initialization()
        await asyncio.shield(task)

    async def _run_initialization(self) -> None:
        ctx = self._ctx()
        try:
            log_event(self._logger, "init.start", ctx,
                      message=f"Starting {self.display_name} provider initialization...")
            self._working_directory = resolve_working_directory(
                self._workspace, self.provider_key, self._logger, ctx
            )
            api_key = self._get_api_key()
            if not api_key:
                log_event(self._logger, "init.missing_key", ctx, level=logging.WARNING,
                          message=f"No {self.backend_label} API key found in configuration")
                raise ConfigurationError(f"Missing {self.backend_label} API key", self.provider_key)
            self._credentials.publish(self.session_variable, api_key)
            self._state = InitState.READY
            log_event(self._logger, "init.ready", ctx,
                      message=f"{self.display_name} provider initialized successfully",
                      working_directory=self._working_directory)
        except Exception as exc:
            log_event(self._logger, "init.error", ctx, level=logging.ERROR,
                      message=f"Failed to initialize {self.display_name} provider: {exc}",
                      error_code=classify_exception(exc).value)
            raise
        finally:
            if self._state is not InitState.READY:
                self._state = InitState.UNINITIALIZED
                if self._init_task is asyncio.current_task():
                    self._init_task = None

    async def wait_for_initialization(self) -> bool:
        try:
            await self.initialize()
        except Exception as exc:
            log_event(self._logger, "init.wait_failed", self._ctx(), level=logging.ERROR,
                      message=f"{self.display_name} provider initialization failed: {exc}")
            return False
        return True

    # ---- credential refresh ----
    async def refresh_configuration(self) -> bool:
        """Reload the credential and publish it to the session holder.

        Initialization runs only when the provider is not already READY; a
        rotated key on a READY provider is published but not re-validated.
        """
        api_key = self._get_api_key()
        if not api_key:
            log_event(self._logger, "refresh.missing_key", self._ctx(), level=logging.WARNING,
                      message=f"{self.backend_label} API key refresh failed: key not found")
            return False
        self._credentials.publish(self.session_variable, api_key)
        log_event(self._logger, "refresh.ok", self._ctx(),
                  message=f"{self.backend_label} API key refreshed from settings")
        if self._state is not InitState.READY:
            await self.initialize()
        return True

    # ---- classification ----
    def is_auth_error(self, message: str) -> bool:
        return is_auth_message(message, self.auth_keywords)

    # ---- request building ----
    @abstractmethod
    def build_request(
        self,
        turns: List[Turn],
        *,
        model: str,
        api_key: str,
        options: QueryOptions,
    ) -> HttpRequestSpec:
        """Translate turns and options into this backend's wire request."""

    # ---- query ----
    async def query(
        self,
        prompt: Optional[str],
        options: Union[QueryOptions, Mapping[str, Any], None] = None,
        cancel_token: Optional[CancellationToken] = None,
        on_message: Optional[StreamCallback] = None,
    ) -> List[CanonicalMessage]:
        """Send one prompt and return ``[CanonicalMessage]``.

        Raises:
            ConfigurationError: credential missing (no popup).
            CancelledError: ``cancel_token`` was signalled, whatever the
                transport reported.
            AuthError: failure message matched the backend's auth keywords
                (no popup).
            TransportError, ContentBlockedError: any other failure, after
                notifying the user.
        """
        await self.initialize()
        api_key = self._get_api_key()
        if not api_key:
            raise ConfigurationError(
                f"{self.backend_label} API key is not configured. "
                + CONFIGURE_COMMAND_TEMPLATE.format(backend=self.backend_label),
                self.provider_key,
            )

        opts = QueryOptions.coerce(options)
        model = self.get_model_id()
        ctx = self._ctx(model)
        try:
            if cancel_token is not None:
                cancel_token.raise_if_cancelled()
            spec = self.build_request(build_turns(prompt, opts), model=model, api_key=api_key, options=opts)
            log_event(self._logger, "query.start", ctx,
                      message=f"Sending request to {self.display_name} using model {model}",
                      url=spec.redacted_url())
            response = await self._send(spec, cancel_token, model)
            if not response.is_success:
                body = response.text
                log_event(self._logger, "query.http_error", ctx, level=logging.ERROR,
                          message=f"{self.display_name} request failed with status {response.status_code}: {body}",
                          http_status=response.status_code)
                raise TransportError(
                    f"{self.display_name} error ({response.status_code}): {body}",
                    self.provider_key,
                    model,
                    status_code=response.status_code,
                    body=body,
                )
            message = self._normalizer.parse(self._decode(response, model))
            if not message.is_empty and on_message is not None:
                on_message(message)
            log_event(self._logger, "query.end", ctx,
                      message=f"{self.display_name} query completed successfully",
                      emitted=not message.is_empty)
            return [message]
        except Exception as exc:
            failure = self._classify_failure(exc, cancel_token, ctx)
            if failure is exc:
                raise
            raise failure from exc

    def _classify_failure(
        self,
        exc: Exception,
        cancel_token: Optional[CancellationToken],
        ctx: LogContext,
    ) -> Exception:
        """Map a query failure to the error the caller receives.

        Order: cancellation, then auth keywords (no popup), then anything
        else (popup). Always returns an exception; never swallows.
        """
        if cancel_token is not None and cancel_token.cancelled:
            log_event(self._logger, "query.cancelled", ctx, level=logging.WARNING,
                      message=f"{self.display_name} request aborted by user")
            return CancelledError(CANCELLED_MESSAGE_TEMPLATE.format(backend=self.backend_label))

        message = str(exc)
        log_event(self._logger, "query.error", ctx, level=logging.ERROR,
                  message=f"{self.display_name} query failed: {message}",
                  error_code=classify_exception(exc).value)
        if self.is_auth_error(message):
            if isinstance(exc, AuthError):
                return exc
            return AuthError(
                message,
                self.provider_key,
                ctx.model,
                status_code=getattr(exc, "status_code", None),
                raw=exc,
            )
        self._notifier.show_error(f"{self.display_name} query failed: {message}")
        return exc

    # ---- transport ----
    def _client(self) -> httpx.AsyncClient:
        if self._http_client is not None:
            return self._http_client
        if self._timeout_seconds is not None:
            if self._owned_client is None or self._owned_client.is_closed:
                self._owned_client = httpx.AsyncClient(timeout=self._timeout_seconds)
            return self._owned_client
        return get_async_client(self._base_url, HTTP_PURPOSE_QUERY)

    async def _post(self, spec: HttpRequestSpec, model: str) -> httpx.Response:
        headers = {**self._extra_headers, **spec.headers}
        try:
            return await self._client().request(spec.method, spec.url, headers=headers, json=spec.json_body)
        except httpx.HTTPError as exc:
            raise TransportError(
                f"{self.display_name} request failed: {exc}",
                self.provider_key,
                model,
                raw=exc,
            ) from exc

    async def _send(
        self,
        spec: HttpRequestSpec,
        cancel_token: Optional[CancellationToken],
        model: str,
    ) -> httpx.Response:
        """Issue the HTTP call; a signalled token aborts it mid-flight."""
        if cancel_token is None:
            return await self._post(spec, model)
        request_task = asyncio.ensure_future(self._post(spec, model))
        cancel_task = asyncio.ensure_future(cancel_token.wait())
        try:
            await asyncio.wait({request_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for t in (request_task, cancel_task):
                if not t.done():
                    t.cancel()
            await asyncio.gather(request_task, cancel_task, return_exceptions=True)
        cancel_token.raise_if_cancelled()
        return request_task.result()

    def _decode(self, response: httpx.Response, model: str) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(
                f"{self.display_name} returned a non-JSON body ({response.status_code})",
                self.provider_key,
                model,
                status_code=response.status_code,
                body=response.text,
                raw=exc,
            ) from exc

    async def aclose(self) -> None:
        """Close the private HTTP client, if this provider created one."""
        if self._owned_client is not None:
            await self._owned_client.aclose()
            self._owned_client = None

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"{type(self).__name__}(state={self._state.value}, model={self.get_model_id()!r})"


__all__ = ["ApiProvider"]
