"""Provider factory.

Host code asks for a backend by canonical name and gets an object
satisfying ``LLMProvider``. Adapter modules are resolved through
``importlib`` on first use, so importing the package never loads every
backend.

The factory neither retries nor falls back to another backend: it returns
an instance or raises :class:`UnknownProviderError`. Construction only
schedules initialization; it is never awaited here.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Mapping, NamedTuple, Optional, Tuple, Type, Union

from .dto.adapter_params import AdapterParams

ParamsLike = Union[AdapterParams, Mapping[str, Any], None]


class UnknownProviderError(Exception):
    """The requested provider could not be resolved or constructed.

    Raised for unregistered names, adapter modules that fail to import or
    lack the registered class, and constructor failures.
    """


class _AdapterRef(NamedTuple):
    module: str
    attr: str


class ProviderFactory:
    """Registry of backend adapters keyed by canonical name."""

    _REGISTRY: Dict[str, _AdapterRef] = {
        "gemini": _AdapterRef("superdesign_providers.gemini.client", "GeminiApiProvider"),
        "mistral": _AdapterRef("superdesign_providers.mistral.client", "MistralApiProvider"),
    }

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Canonical provider names in registration order."""
        return tuple(cls._REGISTRY)

    @classmethod
    def create(cls, provider: str, *, params: ParamsLike = None, **kwargs: Any) -> Any:
        """Build the adapter registered under ``provider``.

        Parameters
        ----------
        provider:
            Canonical name; case and surrounding whitespace are ignored.
        params:
            :class:`AdapterParams` or a mapping validated into one.
        **kwargs:
            Constructor arguments, typically host collaborators
            (``settings``, ``workspace``, ``notifier``, ``credentials``,
            ``http_client``, ``logger``). They override ``params``.

        Raises
        ------
        UnknownProviderError
            See the class docstring for the failure modes.
        """
        if isinstance(params, Mapping):
            params = AdapterParams.model_validate(dict(params))
        adapter_cls = cls._load_adapter(provider)
        ctor_kwargs = cls._coerce_params(params, kwargs)
        try:
            return adapter_cls(**ctor_kwargs)
        except TypeError as exc:
            raise UnknownProviderError(f"Invalid arguments for '{provider}' adapter constructor: {exc}") from exc
        except Exception as exc:  # pragma: no cover - adapter runtime init error
            raise UnknownProviderError(f"Failed to initialize provider '{provider}': {exc}") from exc

    @classmethod
    def _load_adapter(cls, provider: str) -> Type:
        ref = cls._REGISTRY.get((provider or "").strip().lower())
        if ref is None:
            known = ", ".join(cls.supported())
            raise UnknownProviderError(f"Unknown provider '{provider}' (expected one of: {known})")
        try:
            module = import_module(ref.module)
        except Exception as exc:
            raise UnknownProviderError(f"Cannot import '{ref.module}' for provider '{provider}': {exc}") from exc
        adapter_cls = getattr(module, ref.attr, None)
        if adapter_cls is None:
            raise UnknownProviderError(f"'{ref.module}' has no adapter class '{ref.attr}'")
        return adapter_cls

    @staticmethod
    def _coerce_params(params: Optional[AdapterParams], kwargs: Mapping[str, Any]) -> Dict[str, Any]:
        """Flatten ``params`` and overlay ``kwargs``.

        Unset (``None``) fields are left out so adapter defaults apply, the
        ``provider`` field is dropped, and ``headers``/``extra`` are merged
        key by key with ``kwargs`` winning.
        """
        if params is None:
            return dict(kwargs)
        out = params.model_dump(exclude_none=True, exclude={"provider"})
        for key, value in kwargs.items():
            if key in ("headers", "extra") and key in out:
                out[key] = {**out[key], **value}
            else:
                out[key] = value
        return out


__all__ = ["ProviderFactory", "UnknownProviderError"]
