#!/usr/bin/env python3
# __init__.py
# Control layer exposing the CLI orchestrator.
# Author: Daniel Würmli

"""Control layer exposing the CLI orchestrator."""

from .control_system import main

__all__ = ["main"]
