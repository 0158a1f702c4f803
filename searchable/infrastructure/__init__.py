"""Инфраструктурный слой (реализации поисковых backend'ов)."""
