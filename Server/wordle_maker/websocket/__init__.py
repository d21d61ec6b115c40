"""
WebSocket Package

Real-time keypress channel for puzzle sessions.
"""
