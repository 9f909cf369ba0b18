"""Generate Bazel Central Registry entries for a new project release."""

__version__ = "0.3.0"
