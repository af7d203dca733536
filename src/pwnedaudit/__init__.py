"""
pwnedaudit - batch password auditing against Pwned Passwords.

Checks candidate passwords with the k-anonymity range API so that
no password, and no full hash, ever leaves the machine.

Copyright (c) 2025 The pwnedaudit authors.
Licensed under the MIT License.
"""

__version__ = "1.0.0"
