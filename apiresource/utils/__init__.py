# -*- coding: utf-8 -*-
"""Location: ./apiresource/utils/__init__.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Utility helpers for apiresource.
"""
