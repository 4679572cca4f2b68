from __future__ import annotations


class ProfileError(RuntimeError):
    code = "PROFILE_ERROR"

    def __init__(self, message: str, suggestion: str = "") -> None:
        super().__init__(message)
        self.suggestion = suggestion


class InputUnavailable(ProfileError):
    """No commits to analyze: empty range, or every repository in a batch failed."""

    code = "NO_DATA"

    def __init__(self, message: str = "No commits found in the selected period.", suggestion: str = "") -> None:
        super().__init__(
            message,
            suggestion
            or "Check the period, confirm the author has commits in it, and verify with `git log --author=...`.",
        )


class RepositoryError(ProfileError):
    code = "REPO_ERROR"
