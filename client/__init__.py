"""
Client - the single-flight lookup client, its HTTP transport and the services built on it
"""
