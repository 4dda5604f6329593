"""Tollgate - signup, sign-in and session bootstrapping for web APIs."""
