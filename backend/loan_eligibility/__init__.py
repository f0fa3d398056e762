"""Loan eligibility service."""
