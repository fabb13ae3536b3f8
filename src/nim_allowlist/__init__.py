"""Register the NVIDIA NIM model catalogue with OpenClaw's local configuration.

OpenClaw rejects model names that are not listed in its configuration files.
This package merges a versioned catalogue of model identifiers into those
files (with a timestamped backup of each) so every catalogued model is
accepted.
"""

__version__ = "0.1.0"
