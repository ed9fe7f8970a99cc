"""Bundled administrative backends.

Real device backends ship as plugins; see :mod:`policygate.plugins`.
"""
