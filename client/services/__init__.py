from client.services.acronym import AcronymService, normalize_query

__all__ = ["AcronymService", "normalize_query"]
