"""
API Routes - HTTP endpoint handlers

Routes receive HTTP requests, validate them, turn them into events for the
runtime, and return the resulting state.
"""
