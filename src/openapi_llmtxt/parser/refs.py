"""Local `$ref` resolution against the root document."""

import logging

logger = logging.getLogger(__name__)

_MISSING = object()


def _unescape(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


class RefResolver:
    """Resolves `#/...` pointers against one document, memoising results."""

    def __init__(self, root: dict):
        self.root = root
        self._cache: dict[str, dict | None] = {}

    def resolve(self, ref: str) -> dict | None:
        """Return the schema node `ref` points to, or None if it does not resolve."""
        if ref in self._cache:
            return self._cache[ref]
        target = self._walk(ref)
        if target is None:
            logger.debug("Unresolved reference %s", ref)
        self._cache[ref] = target
        return target

    def _walk(self, ref: str) -> dict | None:
        if not isinstance(ref, str) or not ref.startswith("#"):
            return None
        pointer = ref[1:]
        if pointer and not pointer.startswith("/"):
            return None

        current = self.root
        tokens = [_unescape(t) for t in pointer.split("/")[1:]] if pointer else []
        for token in tokens:
            if isinstance(current, dict):
                current = current.get(token, _MISSING)
            elif isinstance(current, list) and token.isdigit() and int(token) < len(current):
                current = current[int(token)]
            else:
                return None
            if current is _MISSING:
                return None

        return current if isinstance(current, dict) else None


def resolve_ref(ref: str, root: dict) -> dict | None:
    """Resolve a single local reference without keeping a resolver around."""
    return RefResolver(root).resolve(ref)
