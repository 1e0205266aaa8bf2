"""FastAPI роутер импорта и экспорта колод."""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Path, Query, UploadFile, status
from fastapi.responses import Response

from deckoracle.core.config import settings
from deckoracle.core.dependencies import CurrentUserId, DatabaseSession
from deckoracle.core.exceptions import (
    BadRequestError,
    DeckNotFoundError,
    DuplicateDeckError,
    FolderNotFoundError,
    PayloadTooLargeError,
    UnsupportedFormatError,
)
from deckoracle.modules.transfer import (
    DeckExporter,
    DeckImporter,
    ExportPayload,
    ImportResult,
    ImportValidationResult,
    ProgressSource,
    get_template,
    validate,
)
from deckoracle.modules.transfer.codecs import parse_format
from deckoracle.modules.transfer.progress import get_progress_source

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transfer", tags=["Импорт и экспорт"])


def get_importer(db: DatabaseSession) -> DeckImporter:
    return DeckImporter(db)


def get_exporter(
    db: DatabaseSession,
    progress_source: Annotated[ProgressSource, Depends(get_progress_source)],
) -> DeckExporter:
    return DeckExporter(db, progress_source)


ImporterDep = Annotated[DeckImporter, Depends(get_importer)]
ExporterDep = Annotated[DeckExporter, Depends(get_exporter)]

FormatQuery = Annotated[str, Query(description="Формат: json, csv, anki или markdown")]
IncludeProgressQuery = Annotated[
    bool, Query(description="Добавить прогресс изучения карточек")
]
IncludeMediaQuery = Annotated[
    bool, Query(description="Зарезервировано: медиа не экспортируются")
]


def _attachment(payload: ExportPayload) -> Response:
    return Response(
        content=payload.content,
        media_type=payload.content_type,
        headers={"Content-Disposition": f'attachment; filename="{payload.filename}"'},
    )


async def _read_upload(file: UploadFile | None, format: str | None) -> tuple[bytes, str]:
    """Прочитать загруженный файл с проверкой размера и формата.

    Raises:
        BadRequestError: Нет файла или не указан формат.
        UnsupportedFormatError: Неизвестный формат.
        PayloadTooLargeError: Файл больше ``TRANSFER_MAX_UPLOAD_BYTES``.
    """
    if file is None:
        raise BadRequestError("No file provided", details={"field": "file"})
    if not format:
        raise BadRequestError("No format specified", details={"field": "format"})

    transfer_format = parse_format(format)
    limit = settings.transfer.max_upload_bytes
    data = await file.read(limit + 1)
    if len(data) > limit:
        raise PayloadTooLargeError(
            f"File exceeds the {limit} byte limit",
            details={"field": "file", "limit": limit},
        )
    return data, transfer_format.value


@router.get(
    "/export/bulk",
    summary="Экспортировать несколько колод",
    description=(
        "Экспортирует колоды в один файл в указанном порядке. "
        "JSON и Anki - массив документов, CSV - общий заголовок и все строки, "
        "Markdown - документы подряд."
    ),
    responses={
        400: UnsupportedFormatError.openapi_response(),
        404: DeckNotFoundError.openapi_response(),
    },
)
async def export_bulk(
    user_id: CurrentUserId,
    exporter: ExporterDep,
    deck_ids: Annotated[str, Query(description="UUID колод через запятую")],
    format: FormatQuery,
    include_progress: IncludeProgressQuery = False,
    include_media: IncludeMediaQuery = False,
) -> Response:
    """Экспортировать несколько колод одним файлом ``decks_export.<ext>``."""
    parsed_ids: list[UUID] = []
    for raw_id in deck_ids.split(","):
        try:
            parsed_ids.append(UUID(raw_id.strip()))
        except ValueError:
            logger.debug("Ignoring malformed deck id %r", raw_id)

    if not parsed_ids:
        raise BadRequestError("No valid deck IDs provided", details={"field": "deck_ids"})

    payload = await exporter.export_decks(
        user_id,
        parsed_ids,
        format,
        include_progress=include_progress,
        include_media=include_media,
    )
    return _attachment(payload)


@router.get(
    "/export/{deck_id}",
    summary="Экспортировать колоду",
    description="Возвращает колоду файлом ``deck_<id>.<ext>`` в выбранном формате.",
    responses={
        400: UnsupportedFormatError.openapi_response(),
        404: DeckNotFoundError.openapi_response(),
    },
)
async def export_deck(
    user_id: CurrentUserId,
    exporter: ExporterDep,
    deck_id: Annotated[UUID, Path(description="UUID колоды")],
    format: FormatQuery,
    include_progress: IncludeProgressQuery = False,
    include_media: IncludeMediaQuery = False,
) -> Response:
    """Экспортировать одну колоду."""
    payload = await exporter.export_deck(
        user_id,
        deck_id,
        format,
        include_progress=include_progress,
        include_media=include_media,
    )
    return _attachment(payload)


@router.post(
    "/import",
    response_model=ImportResult,
    status_code=status.HTTP_200_OK,
    summary="Импортировать колоду",
    description=(
        "Создает колоду из файла или, с merge_duplicates, добавляет карточки в "
        "существующую колоду с тем же названием. Все изменения применяются атомарно."
    ),
    responses={
        400: UnsupportedFormatError.openapi_response(),
        404: FolderNotFoundError.openapi_response(),
        409: DuplicateDeckError.openapi_response(),
        413: PayloadTooLargeError.openapi_response(),
    },
)
async def import_deck(
    user_id: CurrentUserId,
    importer: ImporterDep,
    file: Annotated[UploadFile | None, File(description="Файл колоды")] = None,
    format: Annotated[str | None, Form(description="Формат файла")] = None,
    folder_id: Annotated[UUID | None, Form(description="UUID целевой папки")] = None,
    merge_duplicates: Annotated[
        bool,
        Form(description="Добавить карточки в существующую колоду с тем же названием"),
    ] = False,
    title: Annotated[
        str | None,
        Form(description="Название колоды вместо указанного в файле"),
    ] = None,
) -> ImportResult:
    """Импортировать колоду из загруженного файла."""
    data, transfer_format = await _read_upload(file, format)
    return await importer.import_deck(
        data,
        transfer_format,
        user_id,
        folder_id=folder_id,
        merge_duplicates=merge_duplicates,
        title=title,
    )


@router.post(
    "/import/validate",
    response_model=ImportValidationResult,
    status_code=status.HTTP_200_OK,
    summary="Проверить файл импорта",
    description="Проверяет структуру файла без сохранения данных.",
    responses={
        400: UnsupportedFormatError.openapi_response(),
        413: PayloadTooLargeError.openapi_response(),
    },
)
async def validate_import(
    user_id: CurrentUserId,
    file: Annotated[UploadFile | None, File(description="Файл колоды")] = None,
    format: Annotated[str | None, Form(description="Формат файла")] = None,
) -> ImportValidationResult:
    """Предпросмотр импорта: количество карточек, ошибки и предупреждения."""
    data, transfer_format = await _read_upload(file, format)
    return validate(data, transfer_format)


@router.get(
    "/templates/{format}",
    summary="Получить шаблон импорта",
    description="Пример файла для импорта в выбранном формате.",
    responses={400: UnsupportedFormatError.openapi_response()},
)
async def get_import_template(
    format: Annotated[str, Path(description="Формат: json, csv, anki или markdown")],
) -> Response:
    """Вернуть файл ``import_template.<ext>``."""
    return _attachment(get_template(format))
