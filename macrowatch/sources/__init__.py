"""
External source clients.

Single best-effort retrieval of raw JSON payloads from FRED and NOAA SWPC.
"""
