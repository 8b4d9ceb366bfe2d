# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Short-lived text snippets with user accounts and signed sessions."""

__version__ = "0.1.0"
