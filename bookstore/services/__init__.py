"""서비스 패키지 — 비즈니스 로직 계층.

Service package — Business logic layer.
Services validate business rules, call repositories for DB operations and
map ORM rows to response schemas. Every service class is wrapped with
``log_calls("SERVICE")`` for execution logging.
"""
