from typing import List


class MonkeyParseError(Exception):
    """Raised by the pipeline entry point when the source has syntax errors."""
    def __init__(self, errors: List[str]):
        super().__init__('; '.join(errors))
        self.errors = list(errors)
