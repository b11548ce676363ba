"""Per-stage counters and the run summary built from them."""

from dataclasses import dataclass, field

# Log a progress line every this many data lines
PROGRESS_INTERVAL = 10000


@dataclass
class ImportStats:
    """Counters for one import stage.

    Attributes:
        stage: Stage name used in logs and the summary
        inserted: Rows written that did not exist before
        updated: Existing rows overwritten
        skipped: Source rows rejected or failed
        ends: Runway-end rows written (runway stage only)
        duplicates: Frequency rows ignored because the slot was already filled
    """

    stage: str
    inserted: int = 0
    updated: int = 0
    skipped: int = 0
    ends: int = 0
    duplicates: int = 0

    @property
    def written(self) -> int:
        return self.inserted + self.updated

    def record_write(self, created: bool) -> None:
        if created:
            self.inserted += 1
        else:
            self.updated += 1

    def describe(self) -> str:
        text = f"{self.inserted} inserted, {self.updated} updated, {self.skipped} skipped"
        if self.ends:
            text += f", {self.ends} runway ends"
        if self.duplicates:
            text += f", {self.duplicates} duplicates ignored"
        return text


@dataclass
class ImportReport:
    """Outcome of a full pipeline run."""

    countries: int = 0
    stages: list[ImportStats] = field(default_factory=list)

    def stage(self, name: str) -> ImportStats:
        """Counters of a stage by name.

        Raises:
            KeyError: If the stage did not run.
        """
        for stats in self.stages:
            if stats.stage == name:
                return stats
        raise KeyError(name)

    def format_summary(self) -> str:
        """Human-readable summary printed at the end of a run."""
        lines = ["=" * 50, "Import Summary", "=" * 50, f"Countries: {self.countries} loaded"]
        lines.extend(f"{stats.stage.capitalize()}: {stats.describe()}" for stats in self.stages)
        return "\n".join(lines)
