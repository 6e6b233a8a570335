# -*- coding: utf-8 -*-
"""Location: ./apiresource/services/__init__.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Shared services for apiresource.
"""
