import itertools
import uuid
from typing import Optional


class NodeIdFactory:
    """Hands out node ids that stay unique for the whole process.

    Ids look like ``run_1a2b3c4d_7``: keyword, a per-factory session token and
    a monotonic sequence number, so two nodes created in the same instant
    still differ.
    """

    def __init__(self, session: Optional[str] = None):
        self.session = session or uuid.uuid4().hex[:8]
        self._counter = itertools.count(1)

    def __call__(self, keyword: str) -> str:
        return f"{(keyword or 'node').lower()}_{self.session}_{next(self._counter)}"
