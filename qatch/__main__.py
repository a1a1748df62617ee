#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Qatch - module entry point, keeps `python -m qatch` working."""

from __future__ import annotations

from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
