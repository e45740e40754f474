"""Operation result models"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional


class OperationStatus(Enum):
    """Operation status"""
    SUCCESS = "success"
    IN_PROGRESS = "in_progress"


class ItemState(Enum):
    """Outcome of a single discovered item"""
    ALREADY_CORRECT = "already_correct"
    ADOPTED_BACK = "adopted_back"
    BLOCKED_TARGET_EXISTS = "blocked_target_exists"
    BLOCKED_MANUAL_MODIFICATION = "blocked_manual_modification"
    MATERIALIZED = "materialized"
    SYMLINKED = "symlinked"
    REMOVED = "removed"
    ABSENT = "absent"
    SKIPPED = "skipped"


class Strategy(Enum):
    """How a source is projected into the target"""
    PROCESSED = "processed"  # Tag-filtered copy
    VERBATIM = "verbatim"    # Symlink


@dataclass
class DeployAction:
    """Planned action for one item, computed without side effects"""

    source: Path
    target: Path
    state: ItemState
    strategy: Optional[Strategy] = None

    # Effects the apply step has to perform
    create_parent: bool = False
    replace_existing: bool = False
    drift: bool = False

    # Processed strategy payload
    content: Optional[bytes] = None
    source_hash: Optional[str] = None
    deployed_hash: Optional[str] = None
    cache_key: Optional[str] = None

    # Ancestor symlink that already exposes the source
    via: Optional[Path] = None


@dataclass
class ItemResult:
    """Reported outcome of one item"""

    source: Path
    target: Path
    state: ItemState
    message: str = ""
    dry_run: bool = False
    drift: bool = False  # Manual modifications were overwritten (--force)


@dataclass
class RunResult:
    """Result of a whole towboat invocation"""

    status: OperationStatus
    build_tag: str
    target_dir: Path
    mode: str = "deploy"
    dry_run: bool = False
    discovered: int = 0
    items: List[ItemResult] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    start_time: datetime = field(default_factory=datetime.now)
    end_time: Optional[datetime] = None

    @property
    def is_success(self) -> bool:
        """Check if operation was successful"""
        return self.status == OperationStatus.SUCCESS

    @property
    def duration(self) -> Optional[float]:
        """Get operation duration in seconds"""
        if self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return None

    def add_item(self, item: ItemResult) -> None:
        """Record an item outcome"""
        self.items.append(item)

    def add_warning(self, message: str) -> None:
        """Add a warning"""
        self.warnings.append(message)

    def count(self, state: ItemState) -> int:
        """Count items that ended in the given state"""
        return sum(1 for item in self.items if item.state == state)

    def summary(self) -> Dict[str, int]:
        """Item counts by state, omitting empty states"""
        counts = {}
        for item in self.items:
            counts[item.state.value] = counts.get(item.state.value, 0) + 1
        return counts

    def complete(self, status: Optional[OperationStatus] = None) -> None:
        """Mark operation as complete"""
        self.end_time = datetime.now()
        if status:
            self.status = status
