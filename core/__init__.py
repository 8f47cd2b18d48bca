"""
Core - configuration, constants, errors and data models shared by the client
"""
