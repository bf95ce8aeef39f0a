"""도서 API 테스트 — CRUD, 소프트 삭제/복구, 검색, 통계.

Tests for book endpoints: creation, validation, soft delete and restore,
text and price searches, availability and statistics.
"""

from datetime import datetime
from decimal import Decimal
from uuid import uuid4

from httpx import AsyncClient

from bookstore.models.book import Book

URL = "/api/books"


def _payload(**overrides):
    data = {
        "title": "Domain-Driven Design",
        "author": "Eric Evans",
        "isbn": "9780321125217",
        "price": "54.99",
    }
    data.update(overrides)
    return data


class TestBookCreate:
    async def test_create_book(self, client: AsyncClient):
        """도서 등록 성공 — 201, 기본 재고 True."""
        res = await client.post(URL, json=_payload())
        assert res.status_code == 201
        data = res.json()
        assert data["title"] == "Domain-Driven Design"
        assert Decimal(data["price"]) == Decimal("54.99")
        assert data["available"] is True
        assert data["deleted_at"] is None

    async def test_create_duplicate_isbn(self, client: AsyncClient, book: Book):
        """중복 ISBN — 409 DUPLICATE_ISBN."""
        res = await client.post(URL, json=_payload(isbn=book.isbn))
        assert res.status_code == 409
        body = res.json()
        assert body["code"] == "DUPLICATE_ISBN"
        assert body["status"] == 409
        assert body["path"] == URL

    async def test_create_negative_price(self, client: AsyncClient):
        """음수 가격 — 400 VALIDATION_FAILED, 필드 에러 포함."""
        res = await client.post(URL, json=_payload(price="-1"))
        assert res.status_code == 400
        body = res.json()
        assert body["code"] == "VALIDATION_FAILED"
        assert any(e["field"] == "price" for e in body["errors"])

    async def test_isbn_stored_compact(self, client: AsyncClient):
        """하이픈 ISBN — 하이픈 없는 형태로 저장."""
        res = await client.post(URL, json=_payload(isbn="978-0-321-12521-7"))
        assert res.status_code == 201
        assert res.json()["isbn"] == "9780321125217"

    async def test_hyphenated_duplicate_isbn(self, client: AsyncClient, book: Book):
        res = await client.post(URL, json=_payload(isbn="978-0132350884"))
        assert res.status_code == 409

        res = await client.get(f"{URL}/isbn/978-0-13-235088-4")
        assert res.status_code == 200
        assert res.json()["id"] == str(book.id)

    async def test_timestamps_are_utc(self, client: AsyncClient, book: Book):
        """DB에서 읽은 일시 — UTC 오프셋 포함."""
        data = (await client.get(f"{URL}/{book.id}")).json()
        for value in (data["created_at"], data["updated_at"]):
            assert datetime.fromisoformat(value.replace("Z", "+00:00")).tzinfo is not None

    async def test_create_invalid_isbn(self, client: AsyncClient):
        res = await client.post(URL, json=_payload(isbn="12345"))
        assert res.status_code == 400
        assert res.json()["errors"][0]["field"] == "isbn"

    async def test_create_blank_title(self, client: AsyncClient):
        res = await client.post(URL, json=_payload(title="   "))
        assert res.status_code == 400

    async def test_create_missing_author(self, client: AsyncClient):
        """필수 필드 누락 — rejected_value 없음."""
        data = _payload()
        del data["author"]
        res = await client.post(URL, json=data)
        assert res.status_code == 400
        error = res.json()["errors"][0]
        assert error["field"] == "author"
        assert "rejected_value" not in error or error["rejected_value"] is None


class TestBookRead:
    async def test_get_book(self, client: AsyncClient, book: Book):
        res = await client.get(f"{URL}/{book.id}")
        assert res.status_code == 200
        assert res.json()["isbn"] == book.isbn

    async def test_get_missing_book(self, client: AsyncClient):
        """없는 도서 — 404 ENTITY_NOT_FOUND."""
        res = await client.get(f"{URL}/{uuid4()}")
        assert res.status_code == 404
        assert res.json()["code"] == "ENTITY_NOT_FOUND"

    async def test_get_malformed_id(self, client: AsyncClient):
        res = await client.get(f"{URL}/not-a-uuid")
        assert res.status_code == 400

    async def test_list_paginated(self, client: AsyncClient, book_factory):
        """목록 페이지네이션 — total/pages 계산."""
        for i in range(3):
            await book_factory(title=f"Book {i}", isbn=f"978000000000{i}")
        res = await client.get(URL, params={"page": 1, "per_page": 2})
        assert res.status_code == 200
        data = res.json()
        assert data["total"] == 3
        assert data["pages"] == 2
        assert len(data["items"]) == 2

    async def test_list_sorted_by_price(self, client: AsyncClient, book: Book, second_book: Book):
        res = await client.get(URL, params={"sort": "price", "direction": "asc"})
        titles = [b["title"] for b in res.json()["items"]]
        assert titles == ["Clean Code", "Refactoring"]

    async def test_list_invalid_page(self, client: AsyncClient):
        res = await client.get(URL, params={"page": 0})
        assert res.status_code == 400

    async def test_get_by_isbn(self, client: AsyncClient, book: Book):
        res = await client.get(f"{URL}/isbn/{book.isbn}")
        assert res.status_code == 200
        assert res.json()["id"] == str(book.id)

    async def test_validate_isbn(self, client: AsyncClient, book: Book):
        """ISBN 등록 여부 — 등록된 ISBN은 True."""
        res = await client.get(f"{URL}/validate/isbn", params={"isbn": book.isbn})
        assert res.json() is True
        res = await client.get(f"{URL}/validate/isbn", params={"isbn": "9999999999999"})
        assert res.json() is False


class TestBookUpdate:
    async def test_partial_update(self, client: AsyncClient, book: Book):
        """부분 수정 — 보낸 필드만 변경."""
        res = await client.put(f"{URL}/{book.id}", json={"price": "29.90"})
        assert res.status_code == 200
        data = res.json()
        assert Decimal(data["price"]) == Decimal("29.90")
        assert data["title"] == "Clean Code"

    async def test_update_blank_title_rejected(self, client: AsyncClient, book: Book):
        """공백 제목/저자 수정 — 400, 기존 값 유지."""
        res = await client.put(f"{URL}/{book.id}", json={"title": "   ", "author": " "})
        assert res.status_code == 400
        assert res.json()["code"] == "VALIDATION_FAILED"
        assert {e["field"] for e in res.json()["errors"]} == {"title", "author"}

        res = await client.get(f"{URL}/{book.id}")
        assert res.json()["title"] == "Clean Code"

    async def test_update_title_trimmed(self, client: AsyncClient, book: Book):
        res = await client.put(f"{URL}/{book.id}", json={"title": "  Clean Code 2nd  "})
        assert res.status_code == 200
        assert res.json()["title"] == "Clean Code 2nd"

    async def test_update_to_taken_isbn(self, client: AsyncClient, book: Book, second_book: Book):
        res = await client.put(f"{URL}/{book.id}", json={"isbn": second_book.isbn})
        assert res.status_code == 409

    async def test_update_same_isbn(self, client: AsyncClient, book: Book):
        """자기 ISBN 그대로 — 중복 아님."""
        res = await client.put(f"{URL}/{book.id}", json={"isbn": book.isbn, "title": "Clean Code 2nd"})
        assert res.status_code == 200
        assert res.json()["title"] == "Clean Code 2nd"

    async def test_update_deleted_book(self, client: AsyncClient, book: Book):
        """삭제된 도서 수정 — 400 DELETED_BOOK_ACCESS."""
        await client.delete(f"{URL}/{book.id}")
        res = await client.put(f"{URL}/{book.id}", json={"price": "10.00"})
        assert res.status_code == 400
        assert res.json()["code"] == "DELETED_BOOK_ACCESS"

    async def test_update_availability(self, client: AsyncClient, book: Book):
        res = await client.patch(f"{URL}/{book.id}/availability", params={"available": "false"})
        assert res.status_code == 200
        assert res.json()["available"] is False

        res = await client.get(f"{URL}/availability/false")
        assert [b["id"] for b in res.json()] == [str(book.id)]


class TestBookDelete:
    async def test_soft_delete(self, client: AsyncClient, book: Book):
        """소프트 삭제 — 조회 404, 목록 제외."""
        res = await client.delete(f"{URL}/{book.id}")
        assert res.status_code == 204

        assert (await client.get(f"{URL}/{book.id}")).status_code == 404
        assert (await client.get(URL)).json()["total"] == 0

    async def test_delete_twice(self, client: AsyncClient, book: Book):
        await client.delete(f"{URL}/{book.id}")
        res = await client.delete(f"{URL}/{book.id}")
        assert res.status_code == 400
        assert res.json()["code"] == "DELETED_BOOK_ACCESS"

    async def test_restore(self, client: AsyncClient, book: Book):
        """복구 — deleted_at 초기화 후 다시 조회 가능."""
        await client.delete(f"{URL}/{book.id}")
        res = await client.patch(f"{URL}/{book.id}/restore")
        assert res.status_code == 200
        assert res.json()["deleted_at"] is None
        assert (await client.get(f"{URL}/{book.id}")).status_code == 200

    async def test_restore_active_book(self, client: AsyncClient, book: Book):
        res = await client.patch(f"{URL}/{book.id}/restore")
        assert res.status_code == 400
        assert res.json()["code"] == "INVALID_BOOK_STATE"

    async def test_deleted_isbn_still_reserved(self, client: AsyncClient, book: Book):
        """삭제된 도서의 ISBN도 재사용 불가."""
        await client.delete(f"{URL}/{book.id}")
        res = await client.post(URL, json=_payload(isbn=book.isbn))
        assert res.status_code == 409

    async def test_isbn_lookup_of_deleted_book(self, client: AsyncClient, book: Book):
        await client.delete(f"{URL}/{book.id}")
        res = await client.get(f"{URL}/isbn/{book.isbn}")
        assert res.status_code == 404


class TestBookSearch:
    async def test_keyword_matches_title_or_author(self, client: AsyncClient, book: Book, second_book: Book):
        """키워드 검색 — 제목/저자, 대소문자 무시."""
        res = await client.get(f"{URL}/search/keyword", params={"keyword": "fowler"})
        assert [b["title"] for b in res.json()] == ["Refactoring"]

        res = await client.get(f"{URL}/search/keyword", params={"keyword": "CLEAN"})
        assert [b["title"] for b in res.json()] == ["Clean Code"]

    async def test_blank_keyword(self, client: AsyncClient, book: Book):
        res = await client.get(f"{URL}/search/keyword", params={"keyword": "  "})
        assert res.status_code == 200
        assert res.json() == []

    async def test_keyword_wildcards_are_literal(self, client: AsyncClient, book: Book):
        """% 문자는 와일드카드가 아님."""
        res = await client.get(f"{URL}/search/keyword", params={"keyword": "%"})
        assert res.json() == []

    async def test_search_by_title_and_author(self, client: AsyncClient, book: Book, second_book: Book):
        res = await client.get(f"{URL}/search/title", params={"title": "factor"})
        assert len(res.json()) == 1
        res = await client.get(f"{URL}/search/author", params={"author": "martin"})
        assert len(res.json()) == 2

    async def test_search_excludes_deleted(self, client: AsyncClient, book: Book):
        await client.delete(f"{URL}/{book.id}")
        res = await client.get(f"{URL}/search/title", params={"title": "clean"})
        assert res.json() == []

    async def test_price_range(self, client: AsyncClient, book: Book, second_book: Book):
        """가격 범위 — 양 끝 포함, 한쪽만 지정 가능."""
        res = await client.get(f"{URL}/search/price", params={"min_price": "33.00", "max_price": "40"})
        assert [b["title"] for b in res.json()] == ["Clean Code"]

        res = await client.get(f"{URL}/search/price", params={"min_price": "40"})
        assert [b["title"] for b in res.json()] == ["Refactoring"]

        res = await client.get(f"{URL}/search/price")
        assert len(res.json()) == 2

    async def test_price_range_inverted(self, client: AsyncClient):
        """min > max — 400 INVALID_PRICE_RANGE."""
        res = await client.get(f"{URL}/search/price", params={"min_price": "50", "max_price": "10"})
        assert res.status_code == 400
        assert res.json()["code"] == "INVALID_PRICE_RANGE"

    async def test_combined_search(self, client: AsyncClient, book_factory, book: Book, second_book: Book):
        """복합 검색 — 조건 AND 결합."""
        await book_factory(title="Clean Architecture", isbn="9780134494166", price="30.00", available=False)
        res = await client.get(
            f"{URL}/search",
            params={"keyword": "clean", "available": "true", "max_price": "35"},
        )
        data = res.json()
        assert data["total"] == 1
        assert data["items"][0]["title"] == "Clean Code"


class TestBookStatistics:
    async def test_statistics(self, client: AsyncClient, book: Book, second_book: Book):
        """통계 — 전체/활성/삭제 수."""
        await client.delete(f"{URL}/{book.id}")
        res = await client.get(f"{URL}/statistics")
        assert res.json() == {"total_books": 2, "active_books": 1, "deleted_books": 1}
