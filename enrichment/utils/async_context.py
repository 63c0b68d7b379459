"""Base class for objects that own async resources."""


class AsyncContextManager:
    """Async context manager that calls close() on exit.

    Image providers and the tool registry inherit from this so callers can
    write ``async with build_image_registry() as registry: ...``.
    """

    async def close(self) -> None:
        """Release owned resources. Override in subclass."""
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
