#!/usr/bin/env python3
# __init__.py
# Package marker for the control panel backend.
# Author: Daniel Würmli

"""
Control panel backend.

Automatically loads environment variables from a local .env file when the
package is imported so that backend URLs and machine-specific settings stay
out of the tracked panel configuration.
"""

from .utils.env import load_dotenv

# Load .env once at import. Missing files are ignored.
load_dotenv()

__version__ = "0.1.0"
