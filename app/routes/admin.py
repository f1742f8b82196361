"""
Admin Routes

Back-office endpoints, guarded by HTTP Basic (see app.auth.require_admin).
Create and edit forms post flat multipart bodies (``title_en``,
``description_sk``, ``event_date``...) that are converted into a
MultilingualForm before any content logic runs.

    POST /admin/maintenance/clean-duplicates       → drop duplicate rows
    POST /admin/maintenance/backfill-lead-images   → sync lead images in groups
    GET  /admin/pages/{slug}                       → a static page in every language
    POST /admin/pages/{slug}                       → save a static page in every language
    POST /admin/{kind}                             → create a group
    GET  /admin/{kind}/{item_id}                   → variants by language + gallery
    POST /admin/{kind}/{item_id}                   → update a group
    POST /admin/{kind}/{item_id}/delete            → delete a group

Maintenance and page routes are declared first so ``maintenance`` and
``pages`` are never taken for a content kind.
"""

import logging
from pathlib import Path
from typing import Any

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002
from starlette.datastructures import UploadFile

from app.auth import require_admin
from app.config import settings
from app.content_kinds import CONTENT_KINDS, ContentKind, get_kind
from app.database import get_db
from app.exceptions import ContentNotFoundError
from app.schemas.content_item import (
    AdminItemResponse,
    AdminPageResponse,
    ContentItemResponse,
    CreatedGroupResponse,
    DeleteGroupResponse,
    GalleryImageResponse,
    MaintenanceReport,
    PageResponse,
    PageSectionResponse,
    PageUpdateResponse,
    UpdateGroupResponse,
)
from app.schemas.multilingual import PAGE_SECTION_COUNT, parse_multilingual_form, parse_page_form
from app.services.gallery_service import attach_uploads, set_group_lead, update_gallery
from app.services.grouping_service import resolve_gallery_owner, variants_by_lang
from app.services.image_service import optimize_image, process_team_photo
from app.services.maintenance_service import (
    DEDUPLICATED_KINDS,
    LEAD_IMAGE_KINDS,
    backfill_lead_images,
    clean_duplicates,
)
from app.services.page_service import load_page_editor, save_page, validate_page_slug
from app.services.persistence import SQLAlchemyContentStore, SQLAlchemyGalleryStore, SQLAlchemyPageStore
from app.services.replication_service import create_group, delete_group, update_group
from app.services.storage_service import (
    ALLOWED_DOCUMENT_TYPES,
    ALLOWED_IMAGE_TYPES,
    StorageBackend,
    get_storage,
    read_upload,
)
from app.utils.slugify import generate_filename

router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(require_admin)])
logger = logging.getLogger(__name__)


def _kind_or_404(kind_path: str) -> ContentKind:
    try:
        return get_kind(kind_path)
    except KeyError:
        raise ContentNotFoundError("Content type", kind_path) from None


def _current_language(request: Request) -> str:
    return getattr(request.state, "locale", settings.default_language)


def _uploads(form: Any, prefix: str) -> list[UploadFile]:
    return [
        value
        for key, value in form.multi_items()
        if key.startswith(prefix) and isinstance(value, UploadFile) and value.filename
    ]


async def _store_images(storage: StorageBackend, files: list[UploadFile], folder: str) -> list[str]:
    urls = []
    for file in files:
        data, mime_type = await read_upload(file, settings.max_upload_size, ALLOWED_IMAGE_TYPES)
        url = await storage.upload_file(optimize_image(data), generate_filename(file.filename, folder), mime_type)
        urls.append(url)
    return urls


async def _store_team_photo(storage: StorageBackend, file: UploadFile) -> str:
    data, _ = await read_upload(file, settings.max_team_photo_size, ALLOWED_IMAGE_TYPES)
    filename = generate_filename(f"{Path(file.filename).stem}.jpg", "team")
    return await storage.upload_file(process_team_photo(data), filename, "image/jpeg")


async def _store_document(storage: StorageBackend, file: UploadFile) -> str:
    data, mime_type = await read_upload(file, settings.max_upload_size, ALLOWED_DOCUMENT_TYPES)
    return await storage.upload_file(data, generate_filename(file.filename, "documents"), mime_type)


def _single_upload(form: Any, name: str) -> UploadFile | None:
    files = _uploads(form, name)
    return files[0] if files else None


async def _load(store: SQLAlchemyContentStore, item_id: int) -> Any:
    item = await store.get(item_id)
    if item is None:
        raise ContentNotFoundError(store.kind.name, item_id)
    return item


# ── Maintenance ───────────────────────────────────────────────────────────────


@router.post("/maintenance/clean-duplicates", response_model=MaintenanceReport)
async def clean_duplicates_route(db: AsyncSession = Depends(get_db)):
    stores = [SQLAlchemyContentStore(db, CONTENT_KINDS[name]) for name in DEDUPLICATED_KINDS]
    counts = await clean_duplicates(stores)
    await db.commit()
    return MaintenanceReport(counts=counts)


@router.post("/maintenance/backfill-lead-images", response_model=MaintenanceReport)
async def backfill_lead_images_route(db: AsyncSession = Depends(get_db)):
    counts = {}
    for name in LEAD_IMAGE_KINDS:
        counts[name] = await backfill_lead_images(SQLAlchemyContentStore(db, CONTENT_KINDS[name]))
    await db.commit()
    return MaintenanceReport(counts=counts)


# ── Pages ─────────────────────────────────────────────────────────────────────


def _section_rows(items: list[Any]) -> list[PageSectionResponse]:
    return [
        PageSectionResponse(sort_order=item.sort_order, text=item.alt_text or "", image_url=item.image_url or None)
        for item in items
    ]


@router.get("/pages/{slug}", response_model=AdminPageResponse)
async def get_page_editor(slug: str, db: AsyncSession = Depends(get_db)):
    editor = await load_page_editor(SQLAlchemyPageStore(db), SQLAlchemyGalleryStore(db), validate_page_slug(slug))
    return AdminPageResponse(
        slug=slug,
        pages={
            lang: PageResponse.from_row(page, _section_rows(items)) if page is not None else None
            for lang, (page, items) in editor.items()
        },
    )


@router.post("/pages/{slug}", response_model=PageUpdateResponse)
async def save_page_route(
    slug: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    storage: StorageBackend = Depends(get_storage),
):
    validate_page_slug(slug)
    form = await request.form()
    page_form = parse_page_form(form)
    for number in range(1, PAGE_SECTION_COUNT + 1):
        upload = _single_upload(form, f"section_image_{number}")
        if upload is not None:
            page_form.section_images[number - 1] = (await _store_images(storage, [upload], "pages"))[0]

    saved = await save_page(SQLAlchemyPageStore(db), SQLAlchemyGalleryStore(db), slug, page_form)
    await db.commit()
    for url in saved.removed_images:
        await storage.delete_file(url)

    logger.info("Saved page %s (%s)", slug, ", ".join(saved.record_ids))
    return PageUpdateResponse(slug=slug, record_ids=saved.record_ids, removed_images=saved.removed_images)


# ── Content groups ────────────────────────────────────────────────────────────


@router.post("/{kind_path}", response_model=CreatedGroupResponse, status_code=status.HTTP_201_CREATED)
async def create_item(
    kind_path: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    storage: StorageBackend = Depends(get_storage),
):
    kind = _kind_or_404(kind_path)
    store = SQLAlchemyContentStore(db, kind)
    gallery = SQLAlchemyGalleryStore(db)
    form = await request.form()

    created = await create_group(store, parse_multilingual_form(form, kind), _current_language(request))
    owner_id = created.record_ids.get("en") or next(iter(created.record_ids.values()))
    owner = await store.get(owner_id)

    if kind.gallery_type and kind.lead_from_gallery:
        urls = await _store_images(storage, _uploads(form, "additional_images"), kind.upload_folder)
        await attach_uploads(store, gallery, owner, urls)
        cover = _single_upload(form, "cover_image")
        if cover is not None:
            cover_urls = await _store_images(storage, [cover], kind.upload_folder)
            await set_group_lead(store, owner, cover_urls[0])

    photo = _single_upload(form, "photo") if kind.name == "team" else None
    if photo is not None:
        await set_group_lead(store, owner, await _store_team_photo(storage, photo))

    document = _single_upload(form, "file") if kind.name == "document" else None
    if document is not None:
        await store.update_shared_for_group(created.group_id, {"file_url": await _store_document(storage, document)})

    await db.commit()
    logger.info("Created %s group %s (%s)", kind.name, created.group_id, ", ".join(created.record_ids))
    return CreatedGroupResponse(group_id=created.group_id, record_ids=created.record_ids)


@router.get("/{kind_path}/{item_id}", response_model=AdminItemResponse)
async def get_item(kind_path: str, item_id: int, db: AsyncSession = Depends(get_db)):
    kind = _kind_or_404(kind_path)
    store = SQLAlchemyContentStore(db, kind)
    gallery = SQLAlchemyGalleryStore(db)
    base = await _load(store, item_id)

    variants = await variants_by_lang(store, base)
    response = AdminItemResponse(
        base=ContentItemResponse.from_row(kind, base),
        variants={
            lang: ContentItemResponse.from_row(kind, row) if row is not None else None
            for lang, row in variants.items()
        },
    )
    if kind.gallery_type:
        owner_id = await resolve_gallery_owner(store, gallery, base)
        images = await gallery.get_additional_images(kind.gallery_type, owner_id)
        response.gallery_owner_id = owner_id
        response.gallery = [GalleryImageResponse.model_validate(img) for img in images]
    return response


@router.post("/{kind_path}/{item_id}", response_model=UpdateGroupResponse)
async def update_item(
    kind_path: str,
    item_id: int,
    request: Request,
    db: AsyncSession = Depends(get_db),
    storage: StorageBackend = Depends(get_storage),
):
    kind = _kind_or_404(kind_path)
    store = SQLAlchemyContentStore(db, kind)
    gallery = SQLAlchemyGalleryStore(db)
    base = await _load(store, item_id)
    form = await request.form()
    parsed = parse_multilingual_form(form, kind)

    # Validation runs before any file reaches storage
    result = await update_group(store, base, parsed)

    obsolete_files: list[str] = []
    if kind.name == "team":
        photo = _single_upload(form, "photo")
        if photo is not None or form.get("remove_photo") == "1":
            if base.photo_url:
                obsolete_files.append(base.photo_url)
            photo_url = await _store_team_photo(storage, photo) if photo is not None else None
            await set_group_lead(store, base, photo_url)

    if kind.name == "document":
        document = _single_upload(form, "file")
        if document is not None:
            if base.file_url:
                obsolete_files.append(base.file_url)
            await store.update_shared_for_group(result.group_id, {"file_url": await _store_document(storage, document)})

    removed: list[str] = []
    if kind.gallery_type and kind.lead_from_gallery:
        new_urls = await _store_images(storage, _uploads(form, "additional_images"), kind.upload_folder)
        lead_url = form.get("lead_image_url") if isinstance(form.get("lead_image_url"), str) else None
        cover = _single_upload(form, "cover_image")
        if cover is not None:
            lead_url = (await _store_images(storage, [cover], kind.upload_folder))[0]
        removed = await update_gallery(
            store,
            gallery,
            base,
            remove_ids=[int(value) for value in form.getlist("remove_image_ids") if str(value).isdigit()],
            new_urls=new_urls,
            lead_url=lead_url,
        )

    await db.commit()
    for url in obsolete_files + removed:
        await storage.delete_file(url)

    logger.info("Updated %s group %s", kind.name, result.group_id)
    return UpdateGroupResponse(
        group_id=result.group_id,
        updated=result.updated,
        created=result.created,
        skipped=result.skipped,
        removed_images=removed,
    )


@router.post("/{kind_path}/{item_id}/delete", response_model=DeleteGroupResponse)
async def delete_item(
    kind_path: str,
    item_id: int,
    db: AsyncSession = Depends(get_db),
    storage: StorageBackend = Depends(get_storage),
):
    kind = _kind_or_404(kind_path)
    store = SQLAlchemyContentStore(db, kind)
    gallery = SQLAlchemyGalleryStore(db)
    base = await _load(store, item_id)

    image_urls: list[str] = []
    if kind.gallery_type:
        members = await store.list_group(base.group_id) if base.group_id else [base]
        for member in members:
            image_urls.extend(img.image_url for img in await gallery.get_additional_images(kind.gallery_type, member.id))

    deleted = await delete_group(store, base)
    await db.commit()
    for url in image_urls:
        await storage.delete_file(url)

    logger.info("Deleted %d %s rows (group %s)", deleted, kind.name, base.group_id)
    return DeleteGroupResponse(deleted=deleted)
