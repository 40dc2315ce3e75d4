"""Roster Ledger package.

Daily presence tracking for a seed-driven roster. Organized by feature
modules (roster, attendance, backup, reports) with SOLID service/repository
layers over a key-value persistence primitive and a thin Flask layer.
"""
