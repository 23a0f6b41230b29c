"""Future - deferred two-channel computation with cleanup."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from lazyfuture.errors import NotAFutureError
from lazyfuture.kernel.pattern import Pattern

if TYPE_CHECKING:
    from lazyfuture.kernel.trace import Trace

logger = logging.getLogger(__name__)

F = TypeVar("F")
S = TypeVar("S")
G = TypeVar("G")
R = TypeVar("R")

Reject = Callable[[Any], Any]
Resolve = Callable[[Any], Any]
Fork = Callable[[Reject, Resolve], Any]
Cleanup = Callable[[], Any]


def _expect_future(value: Any, op: str) -> Future[Any, Any]:
    if not isinstance(value, Future):
        raise NotAFutureError(
            f"{op} callback must return a Future, got {type(value).__name__}",
            value,
        )
    return value


class _Race:
    """Decide-once latch for a single concat run.

    The first branch to settle wins. Its delivery is held back until both
    branches have been started; every later arrival is dropped.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._decided = False
        self._started = False
        self._pending: Callable[[], Any] | None = None

    def settle(self, deliver: Callable[[], Any]) -> Any:
        with self._lock:
            if self._decided:
                return None
            self._decided = True
            if not self._started:
                self._pending = deliver
                return None
        return deliver()

    def start(self) -> None:
        with self._lock:
            self._started = True
            pending, self._pending = self._pending, None
        if pending is not None:
            pending()


class _ReleaseOnce:
    """Cleanup of one concat operand, callable at most once.

    Shared by the race latches and the combined release, so a nested race
    that releases a subtree cannot release one of its branches again.
    """

    def __init__(self, release: Cleanup) -> None:
        self._release = release
        self._lock = threading.Lock()
        self._done = False

    @classmethod
    def wrap(cls, release: Cleanup | None) -> _ReleaseOnce | None:
        return None if release is None else cls(release)

    def __call__(self) -> None:
        with self._lock:
            if self._done:
                return
            self._done = True
        self._release()


@dataclass(frozen=True, repr=False)
class Future(Generic[F, S]):
    """A value that depends on time.

    Wraps ``_run(reject, resolve)``, which starts the computation and calls
    at most one of the two continuations at most once, and an optional
    ``_release()`` that cancels pending work. Nothing happens until
    ``run`` is called; every combinator returns a new Future.
    """

    _run: Fork
    _release: Cleanup | None = None

    def run(self, on_failure: Reject, on_success: Resolve) -> Any:
        """Start the computation.

        Args:
            on_failure: Called with the failure value
            on_success: Called with the success value

        Returns:
            Whatever the underlying computation returns (an opaque
            cancellation token, or None)
        """
        return self._run(on_failure, on_success)

    def release(self) -> None:
        """Release resources held by a pending computation. No-op without cleanup."""
        if self._release is not None:
            self._release()

    def _create(self, run_func: Fork) -> Future[Any, Any]:
        """Create a new future that keeps this one's cleanup."""
        return Future(run_func, self._release)

    # -- Construction ---------------------------------------------------

    @staticmethod
    def of(value: S) -> Future[Any, S]:
        """A future that succeeds immediately with ``value``."""
        def run_func(_: Reject, resolve: Resolve) -> Any:
            return resolve(value)

        return Future(run_func)

    @staticmethod
    def rejected(reason: F) -> Future[F, Any]:
        """A future that fails immediately with ``reason``."""
        def run_func(reject: Reject, _: Resolve) -> Any:
            return reject(reason)

        return Future(run_func)

    @staticmethod
    def empty() -> Future[Any, Any]:
        """A future that never settles - the identity of concat."""
        def run_func(_: Reject, __: Resolve) -> None:
            return None

        return Future(run_func)

    # -- Functor / Chain / Apply ----------------------------------------

    def map(self, func: Callable[[S], R]) -> Future[F, R]:
        """Transform the success value. Failures pass through.

        Exceptions raised by ``func`` propagate out of ``run``.
        """
        run = self._run

        def new_run(reject: Reject, resolve: Resolve) -> Any:
            return run(reject, lambda value: resolve(func(value)))

        return self._create(new_run)

    def chain(self, func: Callable[[S], Future[F, R]]) -> Future[F, R]:
        """Continue with the future built from the success value.

        ``func`` is only called once this future has succeeded; the returned
        future is run with the same continuations.
        """
        run = self._run

        def new_run(reject: Reject, resolve: Resolve) -> Any:
            def on_success(value: S) -> Any:
                return _expect_future(func(value), "chain").run(reject, resolve)

            return run(reject, on_success)

        return self._create(new_run)

    def ap(self, other: Future[F, Any]) -> Future[F, Any]:
        """Apply the function held by this future to the value held by ``other``.

        The function resolves first; ``other`` is started afterwards.
        """
        return self.chain(lambda func: other.map(func))

    # -- Semigroup ------------------------------------------------------

    def concat(self, other: Future[F, S]) -> Future[F, S]:
        """Race two futures; the first outcome wins and the loser is released."""
        this = self
        this_release = _ReleaseOnce.wrap(self._release)
        that_release = _ReleaseOnce.wrap(other._release)
        cleanups = [c for c in (this_release, that_release) if c is not None]

        combined: Cleanup | None
        if len(cleanups) == 2:
            first, second = cleanups

            def release_both() -> None:
                first()
                second()

            combined = release_both
        else:
            combined = cleanups[0] if cleanups else None

        def new_run(reject: Reject, resolve: Resolve) -> Any:
            race = _Race()

            def guard(continuation: Callable[[Any], Any], loser: Cleanup | None, side: str) -> Callable[[Any], Any]:
                def settle(value: Any) -> Any:
                    def deliver() -> Any:
                        logger.debug("concat: %s branch settled first, releasing the other", side)
                        if loser is not None:
                            loser()
                        return continuation(value)

                    return race.settle(deliver)

                return settle

            this_token = this.run(guard(reject, that_release, "left"), guard(resolve, that_release, "left"))
            that_token = other.run(guard(reject, this_release, "right"), guard(resolve, this_release, "right"))
            race.start()
            return this_token or that_token

        return Future(new_run, combined)

    # -- Recovery -------------------------------------------------------

    def or_else(self, func: Callable[[F], Future[G, S]]) -> Future[G, S]:
        """Replace a failure with the future built from the failure value."""
        run = self._run

        def new_run(reject: Reject, resolve: Resolve) -> Any:
            def on_failure(reason: F) -> Any:
                return _expect_future(func(reason), "or_else").run(reject, resolve)

            return run(on_failure, resolve)

        return self._create(new_run)

    # -- Folds and extended transformations -----------------------------

    def fold(self, on_failure: Callable[[F], R], on_success: Callable[[S], R]) -> Future[Any, R]:
        """Collapse both channels into the success channel."""
        run = self._run

        def new_run(_: Reject, resolve: Resolve) -> Any:
            return run(
                lambda reason: resolve(on_failure(reason)),
                lambda value: resolve(on_success(value)),
            )

        return self._create(new_run)

    def cata(self, pattern: Pattern | Any) -> Future[Any, Any]:
        """fold driven by a record of ``rejected``/``resolved`` handlers."""
        pattern = Pattern.coerce(pattern)
        return self.fold(pattern.rejected, pattern.resolved)

    def swap(self) -> Future[S, F]:
        """Exchange the failure and success channels."""
        run = self._run

        def new_run(reject: Reject, resolve: Resolve) -> Any:
            return run(resolve, reject)

        return self._create(new_run)

    def bimap(self, on_failure: Callable[[F], G], on_success: Callable[[S], R]) -> Future[G, R]:
        """Map each channel with its own function, keeping channels apart."""
        run = self._run

        def new_run(reject: Reject, resolve: Resolve) -> Any:
            return run(
                lambda reason: reject(on_failure(reason)),
                lambda value: resolve(on_success(value)),
            )

        return self._create(new_run)

    def rejected_map(self, func: Callable[[F], G]) -> Future[G, S]:
        """Transform the failure value. Successes pass through."""
        run = self._run

        def new_run(reject: Reject, resolve: Resolve) -> Any:
            return run(lambda reason: reject(func(reason)), resolve)

        return self._create(new_run)

    # -- Tracing --------------------------------------------------------

    def traced(self, trace: Trace, label: str) -> Future[F, S]:
        """Record fork, outcome and release events of this future in ``trace``."""
        run = self._run
        release = self._release
        info = {"label": label}

        def new_run(reject: Reject, resolve: Resolve) -> Any:
            fork_id = trace.record("fork", info=info)

            def on_failure(reason: F) -> Any:
                trace.record("rejected", info=info, parent_id=fork_id)
                return reject(reason)

            def on_success(value: S) -> Any:
                trace.record("resolved", info=info, parent_id=fork_id)
                return resolve(value)

            return run(on_failure, on_success)

        def new_release() -> None:
            trace.record("release", info=info)
            if release is not None:
                release()

        return Future(new_run, new_release)

    # -- Show -----------------------------------------------------------

    def __repr__(self) -> str:
        return "Future"

    __str__ = __repr__


def succeeded(value: S) -> Future[Any, S]:
    """Build a future that succeeds with ``value``."""
    return Future.of(value)


def failed(reason: F) -> Future[F, Any]:
    """Build a future that fails with ``reason``."""
    return Future.rejected(reason)


def never() -> Future[Any, Any]:
    """Build a future that never settles."""
    return Future.empty()
