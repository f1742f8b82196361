"""
Persistence collaborators

The multilingual core talks to the database only through the abstract
stores defined here:

    ContentStore   — per-language rows of one content kind
    GalleryStore   — additional images attached to an owner row
    PageStore      — static pages, one row per (lang, slug)

Every method is mandatory; the SQLAlchemy implementations below are the
ones wired into the application. Writes only flush, the request handler
owns the transaction and commits once at the end.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002

from app.content_kinds import ContentKind  # noqa: TC001
from app.models import AdditionalImage, Page

logger = logging.getLogger(__name__)


class ContentStore(ABC):
    """Storage contract for the rows of one content kind."""

    kind: ContentKind

    @abstractmethod
    async def get(self, item_id: int) -> Any | None: ...

    @abstractmethod
    async def get_by_group_and_lang(self, group_id: str, lang: str) -> Any | None: ...

    @abstractmethod
    async def list_group(self, group_id: str) -> list[Any]: ...

    @abstractmethod
    async def get_by_slug(self, lang: str, slug: str) -> Any | None: ...

    @abstractmethod
    async def find_by_slug(self, slug: str) -> list[Any]: ...

    @abstractmethod
    async def list_by_lang(self, lang: str, published_only: bool = False) -> list[Any]: ...

    @abstractmethod
    async def create(self, values: dict[str, Any]) -> Any: ...

    @abstractmethod
    async def update(self, item_id: int, values: dict[str, Any]) -> Any | None: ...

    @abstractmethod
    async def set_group(self, item_id: int, group_id: str) -> None: ...

    @abstractmethod
    async def update_shared_for_group(self, group_id: str, values: dict[str, Any]) -> list[Any]: ...

    @abstractmethod
    async def slug_exists(self, lang: str, slug: str, exclude_id: int | None = None) -> bool: ...

    @abstractmethod
    async def delete(self, item_id: int) -> bool: ...

    @abstractmethod
    async def delete_group(self, group_id: str) -> int: ...


class GalleryStore(ABC):
    """Storage contract for gallery images."""

    @abstractmethod
    async def get_additional_images(self, content_type: str, owner_id: int) -> list[Any]: ...

    @abstractmethod
    async def add_additional_images(self, content_type: str, owner_id: int, urls: list[str]) -> list[Any]: ...

    @abstractmethod
    async def replace_additional_image_items(
        self, content_type: str, owner_id: int, items: list[dict[str, Any]]
    ) -> list[Any]: ...

    @abstractmethod
    async def delete_additional_images(self, content_type: str, owner_id: int) -> int: ...

    @abstractmethod
    def savepoint(self) -> AbstractAsyncContextManager[Any]:
        """Scope whose failure rolls back only the statements issued inside it."""


class PageStore(ABC):
    @abstractmethod
    async def list_pages(self, lang: str) -> list[Any]: ...

    @abstractmethod
    async def get_page(self, lang: str, slug: str) -> Any | None: ...

    @abstractmethod
    async def upsert_page(self, lang: str, slug: str, title: str, content: Any) -> Any:
        """Insert or update the (lang, slug) page; the stored image_url is left as is."""


# ── SQLAlchemy implementations ────────────────────────────────────────────────


class SQLAlchemyContentStore(ContentStore):
    def __init__(self, db: AsyncSession, kind: ContentKind):
        self.db = db
        self.kind = kind
        self.model = kind.model

    def _ordering(self) -> list[Any]:
        clauses = []
        for key in self.kind.order_by:
            desc = key.startswith("-")
            column = getattr(self.model, key.lstrip("-"))
            clause = column.desc() if desc else column.asc()
            clauses.append(clause.nulls_last())
        return clauses

    async def get(self, item_id: int) -> Any | None:
        return await self.db.get(self.model, item_id)

    async def get_by_group_and_lang(self, group_id: str, lang: str) -> Any | None:
        result = await self.db.execute(
            select(self.model)
            .where(self.model.group_id == group_id, self.model.lang == lang)
            .order_by(self.model.id)
            .limit(1)
        )
        return result.scalars().first()

    async def list_group(self, group_id: str) -> list[Any]:
        result = await self.db.execute(
            select(self.model).where(self.model.group_id == group_id).order_by(self.model.id)
        )
        return list(result.scalars().all())

    async def get_by_slug(self, lang: str, slug: str) -> Any | None:
        if not self.kind.has_slug:
            return None
        result = await self.db.execute(
            select(self.model).where(self.model.lang == lang, self.model.slug == slug).limit(1)
        )
        return result.scalars().first()

    async def find_by_slug(self, slug: str) -> list[Any]:
        if not self.kind.has_slug:
            return []
        result = await self.db.execute(
            select(self.model).where(self.model.slug == slug).order_by(self.model.id)
        )
        return list(result.scalars().all())

    async def list_by_lang(self, lang: str, published_only: bool = False) -> list[Any]:
        query = select(self.model).where(self.model.lang == lang)
        if published_only and self.kind.published_field:
            query = query.where(getattr(self.model, self.kind.published_field).is_(True))
        result = await self.db.execute(query.order_by(*self._ordering()))
        return list(result.scalars().all())

    async def create(self, values: dict[str, Any]) -> Any:
        row = self.model(**values)
        self.db.add(row)
        await self.db.flush()
        logger.debug("Created %s id=%s lang=%s group=%s", self.kind.name, row.id, row.lang, row.group_id)
        return row

    async def update(self, item_id: int, values: dict[str, Any]) -> Any | None:
        row = await self.get(item_id)
        if row is None:
            return None
        for key, value in values.items():
            setattr(row, key, value)
        await self.db.flush()
        return row

    async def set_group(self, item_id: int, group_id: str) -> None:
        await self.update(item_id, {"group_id": group_id})

    async def update_shared_for_group(self, group_id: str, values: dict[str, Any]) -> list[Any]:
        rows = await self.list_group(group_id)
        for row in rows:
            for key, value in values.items():
                setattr(row, key, value)
        await self.db.flush()
        return rows

    async def slug_exists(self, lang: str, slug: str, exclude_id: int | None = None) -> bool:
        query = select(func.count()).select_from(self.model).where(
            self.model.lang == lang, self.model.slug == slug
        )
        if exclude_id is not None:
            query = query.where(self.model.id != exclude_id)
        result = await self.db.execute(query)
        return (result.scalar() or 0) > 0

    async def _delete_images(self, ids: list[int]) -> None:
        if not self.kind.gallery_type or not ids:
            return
        await self.db.execute(
            delete(AdditionalImage).where(
                AdditionalImage.content_type == self.kind.gallery_type,
                AdditionalImage.content_id.in_(ids),
            )
        )

    async def delete(self, item_id: int) -> bool:
        row = await self.get(item_id)
        if row is None:
            return False
        await self._delete_images([row.id])
        await self.db.delete(row)
        await self.db.flush()
        return True

    async def delete_group(self, group_id: str) -> int:
        rows = await self.list_group(group_id)
        await self._delete_images([row.id for row in rows])
        for row in rows:
            await self.db.delete(row)
        await self.db.flush()
        return len(rows)


class SQLAlchemyGalleryStore(GalleryStore):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_additional_images(self, content_type: str, owner_id: int) -> list[AdditionalImage]:
        result = await self.db.execute(
            select(AdditionalImage)
            .where(AdditionalImage.content_type == content_type, AdditionalImage.content_id == owner_id)
            .order_by(AdditionalImage.sort_order, AdditionalImage.id)
        )
        return list(result.scalars().all())

    async def add_additional_images(self, content_type: str, owner_id: int, urls: list[str]) -> list[AdditionalImage]:
        existing = await self.get_additional_images(content_type, owner_id)
        start = len(existing)
        images = [
            AdditionalImage(
                content_type=content_type,
                content_id=owner_id,
                image_url=url,
                alt_text="",
                sort_order=start + idx,
            )
            for idx, url in enumerate(urls)
        ]
        self.db.add_all(images)
        await self.db.flush()
        return images

    async def replace_additional_image_items(
        self, content_type: str, owner_id: int, items: list[dict[str, Any]]
    ) -> list[AdditionalImage]:
        """Swap the owner's whole image set for ``items``; repeating the call with the same items is a no-op."""
        await self.delete_additional_images(content_type, owner_id)
        images = [
            AdditionalImage(
                content_type=content_type,
                content_id=owner_id,
                image_url=item["image_url"],
                alt_text=item.get("alt_text") or "",
                sort_order=item.get("sort_order", idx),
            )
            for idx, item in enumerate(items)
        ]
        self.db.add_all(images)
        await self.db.flush()
        return images

    async def delete_additional_images(self, content_type: str, owner_id: int) -> int:
        result = await self.db.execute(
            delete(AdditionalImage).where(
                AdditionalImage.content_type == content_type, AdditionalImage.content_id == owner_id
            )
        )
        await self.db.flush()
        return result.rowcount or 0

    def savepoint(self) -> AbstractAsyncContextManager[Any]:
        return self.db.begin_nested()


class SQLAlchemyPageStore(PageStore):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_pages(self, lang: str) -> list[Page]:
        result = await self.db.execute(select(Page).where(Page.lang == lang).order_by(Page.id))
        return list(result.scalars().all())

    async def get_page(self, lang: str, slug: str) -> Page | None:
        result = await self.db.execute(select(Page).where(Page.lang == lang, Page.slug == slug).limit(1))
        return result.scalars().first()

    async def upsert_page(self, lang: str, slug: str, title: str, content: Any) -> Page:
        page = await self.get_page(lang, slug)
        if page is None:
            page = Page(lang=lang, slug=slug, title=title, content=content)
            self.db.add(page)
        else:
            page.title = title
            page.content = content
        await self.db.flush()
        return page
