from dataclasses import dataclass

@dataclass(frozen=True)
class TrackedFile:
    """
    A file listed by a version-control index, relative to the repository root.
    """
    relative_path: str
    size_hint: int

    def __post_init__(self):
        if not self.relative_path:
            raise ValueError("Tracked path cannot be empty.")
        if self.size_hint < 0:
            raise ValueError(f"Size cannot be negative for {self.relative_path}.")
