# Copyright (C) 2025 Torsten Knodt and contributors
# GNU General Public License
# SPDX-License-Identifier: GPL-3.0-or-later
"""Extract LinkedIn messaging threads from saved pages and log them to a CRM."""

__version__ = "0.1.0"
