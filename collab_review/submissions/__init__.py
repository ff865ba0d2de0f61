"""Collaboration submission modal, review cards and the approval workflow."""
