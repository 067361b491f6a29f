"""Named transition registry and the async-capable invoker."""

import inspect
import logging
from collections.abc import Awaitable, Iterator, Mapping
from types import MappingProxyType
from typing import Any

from transitionx.core.exceptions import UnknownTransitionError
from transitionx.services.state.types import LogSink, State, TransitionFn


class TransitionRegistry(Mapping[str, TransitionFn]):
    """Read-only mapping of transition names to transition functions.

    The registry copies whatever mapping it is given, so later changes to the
    caller's dict are not seen here.
    """

    def __init__(self, transitions: Mapping[str, TransitionFn] | None = None):
        """Copy and check the transition mapping.

        Args:
            transitions: Mapping of name to callable taking (state, *args, **kwargs)

        Raises:
            TypeError: If a name is not a non-empty string or a value is not callable
        """
        checked: dict[str, TransitionFn] = {}
        for name, transition in (transitions or {}).items():
            if not isinstance(name, str) or not name:
                raise TypeError(f"Transition names must be non-empty strings, got {name!r}")
            if not callable(transition):
                raise TypeError(f'Transition "{name}" is not callable')
            checked[name] = transition
        self._transitions = MappingProxyType(checked)

    def __getitem__(self, name: str) -> TransitionFn:
        """Look up a transition by name.

        Raises:
            UnknownTransitionError: If no transition is registered under name
        """
        try:
            return self._transitions[name]
        except KeyError:
            raise UnknownTransitionError(name) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._transitions)

    def __len__(self) -> int:
        return len(self._transitions)

    def __contains__(self, name: object) -> bool:
        return name in self._transitions

    def names(self) -> list[str]:
        """Registered transition names in registration order."""
        return list(self._transitions)


class TransitionInvoker:
    """Runs registered transitions against a live state dict.

    Calling the invoker resolves the name immediately, so an unknown name
    raises before anything is awaited. The returned awaitable runs the
    transition and completes only after any awaitable it returned has.
    """

    def __init__(self, registry: TransitionRegistry, state: State, log: LogSink):
        """
        Args:
            registry: Transitions available to this invoker
            state: Live state dict handed to every transition
            log: Diagnostic sink, called as log(message, level=..., **context)
        """
        self._registry = registry
        self._state = state
        self._log = log

    def __call__(self, name: str, *args: Any, **kwargs: Any) -> Awaitable[None]:
        self._log(f'Attempting transition: "{name}"', args=args, kwargs=kwargs)
        try:
            transition = self._registry[name]
        except UnknownTransitionError as e:
            self._log(str(e), level=logging.ERROR)
            raise
        return self._run(name, transition, args, kwargs)

    async def _run(
        self,
        name: str,
        transition: TransitionFn,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> None:
        self._log("State before transition", state=dict(self._state))
        try:
            result = transition(self._state, *args, **kwargs)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            self._log(f'Error during transition "{name}": {e}', level=logging.ERROR)
            raise
        self._log("State after transition", state=dict(self._state))
