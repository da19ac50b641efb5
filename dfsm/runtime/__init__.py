"""
Runtime helpers for driving machines from several threads.
"""
