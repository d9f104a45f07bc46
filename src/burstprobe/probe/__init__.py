# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Burst probing: fire N login requests at once and record how each resolves."""

from .runner import OutcomeSink, ProbeRunner, format_outcome_line, print_line

__all__ = ["OutcomeSink", "ProbeRunner", "format_outcome_line", "print_line"]
