"""Pull-request title check orchestration."""
from typing import List, Optional

from .authors import is_author_ignored, parse_ignore_rules
from .config import Config
from .models import Author, CheckOutcome, IgnoreRule
from .observers import CheckObserver
from .sources import load_text
from .title import validate_title


class PullRequestCheck:
    """Runs the author ignore check, then title validation, and reports both.

    The configuration is frozen into a ``ValidationConfig`` when the check is
    created, so one instance can be reused across many titles.
    """

    def __init__(self, config: Config, observers: Optional[List[CheckObserver]] = None):
        self.config = config
        self.validation_config = config.to_validation_config()
        self.ignore_source = config.resolve_ignore_source()
        self.observers: List[CheckObserver] = list(observers or [])

    def add_observer(self, observer: CheckObserver) -> None:
        self.observers.append(observer)

    def remove_observer(self, observer: CheckObserver) -> None:
        self.observers.remove(observer)

    async def load_ignore_rules(self) -> List[IgnoreRule]:
        """Load the configured ignore rules; load failures propagate."""
        if not self.ignore_source:
            return []
        return parse_ignore_rules(await load_text(self.ignore_source))

    async def is_ignored(self, author: Author) -> bool:
        rules = await self.load_ignore_rules()
        return bool(rules) and is_author_ignored(rules, author)

    async def run(self, title: str, author: Author) -> CheckOutcome:
        """Check a pull-request title written by ``author``."""
        if await self.is_ignored(author):
            outcome = CheckOutcome(valid=True, skipped=True)
            for observer in self.observers:
                await observer.on_author_ignored(author)
        else:
            result = validate_title(title, self.validation_config)
            outcome = CheckOutcome(valid=result.valid, reason=result.reason)

        for observer in self.observers:
            await observer.on_check_completed(title, author, outcome)

        return outcome
