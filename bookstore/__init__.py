"""Bookstore API — 도서, 회원, 주문, 대여 관리 서버.

Bookstore API server package (books, members, orders, loans).
"""
