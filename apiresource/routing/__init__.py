# -*- coding: utf-8 -*-
"""Location: ./apiresource/routing/__init__.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Per-version route tables and the cross-version fallback that ties them together.
"""
