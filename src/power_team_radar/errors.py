from __future__ import annotations


class RadarError(Exception):
    pass


class FetchError(RadarError):
    def __init__(
        self,
        url: str,
        status: int | None = None,
        timed_out: bool = False,
        reason: str | None = None,
    ) -> None:
        self.url = url
        self.status = status
        self.timed_out = timed_out
        self.reason = reason
        super().__init__(self._describe())

    def _describe(self) -> str:
        if self.timed_out:
            return f"Fetch timed out: {self.url}"
        if self.status is not None:
            return f"Fetch failed {self.status}: {self.url}"
        return f"Fetch failed: {self.url} ({self.reason or 'unknown error'})"


class SubscriptionStoreError(RadarError):
    pass
