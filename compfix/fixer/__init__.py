"""
Remediation subsystem for compfix.

Modules:
  runner.py   — Remediator: reown + strip group/other write, path by path.
  executor.py — command runners and privilege-escalation adapters.
"""
