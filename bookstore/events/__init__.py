"""도메인 이벤트 패키지.

Domain event package: event models, the in-process publisher and the
default listeners. Importing ``bookstore.events.listeners`` registers the
listeners on the shared ``publisher``.
"""
