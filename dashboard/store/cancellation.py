"""
Cancellation tokens for in-flight store operations.
"""


class CancellationToken:
    """
    Marks a group of async operations as abandoned.

    Gateway calls already in flight are not interrupted; the store checks
    the token when a response arrives and drops it if the token has been
    cancelled.

    Usage:
        token = CancellationToken()
        task = asyncio.create_task(cache.refresh(token=token))
        token.cancel()  # the refresh result will not be applied
    """

    def __init__(self) -> None:
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True

    def __repr__(self) -> str:
        return f"<CancellationToken(cancelled={self._cancelled})>"
