"""
BusTicket Ledger - Source Package

A single-user ledger for a small bus-ticket agency. Records ticket-sale
commission entries and operating expenses, keeps them in local storage and
derives dashboards and monthly reports from them.

DESIGN PRINCIPLES:
1. One owned store, every mutation goes through it
2. Storage is written through on every change
3. Reports are pure functions of the current snapshot
4. The AI only drafts entries, it never edits existing ones
"""

__version__ = "1.0.0"
__author__ = "BusTicket Ledger Team"
