# json_table_editor/session.py
import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from json_table_editor.document import parse_document, serialize_document
from json_table_editor.errors import MappingError, ParseError, ValidationError
from json_table_editor.grid import CellEdit
from json_table_editor.mutator import apply_cell_edit, apply_row_replace, locate_row
from json_table_editor.projector import KEY_COLUMN, ByKey, Projection, RowLocation, project
from json_table_editor.sections import Section, detect_sections, find_section

logger = logging.getLogger(__name__)


@dataclass
class RowEdit:
    location: RowLocation
    backup_text: str


class EditorSession:
    """
    State of one editing session: the document, the raw editor text, the
    selected section and the pending row edit, if any.

    Sections and projections are never cached; they are rebuilt from the
    document on every call so they always reflect the latest mutation.
    """

    def __init__(self, document: Any = None):
        self.document: Any = None
        self.text: str = ""
        self.selected_section_id: Optional[str] = None
        self.row_edit: Optional[RowEdit] = None
        self.last_upload_id: Optional[str] = None
        if document is not None:
            self.load_document(document)

    # ------------------------------
    # Loading
    # ------------------------------
    def load_document(self, document: Any) -> None:
        self.document = document
        self.text = serialize_document(document)
        self.selected_section_id = None
        self.row_edit = None

    def load_text(self, text: str) -> None:
        """Replace the document with the parsed editor text. Invalid text changes nothing."""
        self._require_no_row_edit("apply editor text")
        selected = self.selected_section_id
        self.load_document(parse_document(text))
        # same session, so keep the table on the section the user was looking at
        self.selected_section_id = selected

    def claim_upload(self, upload_id: str) -> bool:
        """True the first time an upload is seen; a failed import is not retried."""
        if upload_id == self.last_upload_id:
            return False
        self.last_upload_id = upload_id
        return True

    def import_file(self, filename: str, content: bytes) -> None:
        if not filename.lower().endswith(".json"):
            raise ValidationError("Please choose a .json file")
        self._require_no_row_edit("import a file")
        try:
            text = content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ParseError(f"{filename} is not UTF-8 text") from e
        document = parse_document(text)
        self.load_document(document)
        logger.info("Imported document from %s", filename)

    def export_bytes(self) -> bytes:
        return serialize_document(self.document).encode("utf-8")

    # ------------------------------
    # Table view
    # ------------------------------
    def sections(self) -> List[Section]:
        return detect_sections(self.document)

    def select_section(self, section_id: str) -> Section:
        section = find_section(self.sections(), section_id)
        self.selected_section_id = section.id
        return section

    def current_section(self) -> Optional[Section]:
        sections = self.sections()
        if not sections:
            return None
        for section in sections:
            if section.id == self.selected_section_id:
                return section
        return sections[0]

    def projection(self) -> Optional[Projection]:
        section = self.current_section()
        if section is None:
            return None
        return project(section)

    # ------------------------------
    # Edits
    # ------------------------------
    def edit_cell(self, row_index: int, column: str, raw_value: Any) -> Any:
        self._require_no_row_edit("edit cells")
        projection = self._require_projection()
        value = apply_cell_edit(self.document, projection.mapping, row_index, column, raw_value)
        self._refresh_text()
        return value

    def apply_grid_edits(self, edits: Sequence[CellEdit]) -> int:
        """Apply the edits diffed from the grid against a single projection."""
        self._require_no_row_edit("edit cells")
        projection = self._require_projection()
        for edit in edits:
            apply_cell_edit(self.document, projection.mapping, edit.row_index, edit.column, edit.value)
        if edits:
            self._refresh_text()
        return len(edits)

    def begin_row_edit(self, row_index: int) -> str:
        """Enter row-edit mode; the editor text becomes the row's JSON."""
        self._require_no_row_edit("start another row edit")
        projection = self._require_projection()
        if not 0 <= row_index < len(projection.mapping):
            raise MappingError(f"Row {row_index} does not exist ({len(projection.mapping)} rows)")
        location = projection.mapping[row_index]
        row = dict(locate_row(self.document, location))
        if isinstance(location, ByKey):
            row.pop(KEY_COLUMN, None)
            row = {KEY_COLUMN: location.key, **row}

        self.row_edit = RowEdit(location, self.text)
        self.text = serialize_document(row)
        return self.text

    def apply_row_edit(self, text: Optional[str] = None) -> None:
        if self.row_edit is None:
            raise ValidationError("No row edit in progress")
        if text is not None:
            self.text = text
        replacement = parse_document(self.text)
        apply_row_replace(self.document, self.row_edit.location, replacement)
        self.row_edit = None
        self._refresh_text()

    def cancel_row_edit(self) -> None:
        if self.row_edit is None:
            raise ValidationError("No row edit in progress")
        # the document is untouched while a row edit is pending
        self.text = self.row_edit.backup_text
        self.row_edit = None

    @property
    def in_row_edit(self) -> bool:
        return self.row_edit is not None

    # ------------------------------
    # Server
    # ------------------------------
    def prepare_save(self) -> Any:
        """Parse the editor text for saving; nothing is sent when this raises."""
        self._require_no_row_edit("save the document")
        return parse_document(self.text)

    def load_from_server(self, client) -> None:
        self._require_no_row_edit("load from the server")
        self.load_document(client.load_document())

    def save_to_server(self, client) -> None:
        document = self.prepare_save()
        client.save_document(document)
        self.document = document
        self._refresh_text()

    # ------------------------------
    # Internals
    # ------------------------------
    def _refresh_text(self) -> None:
        self.text = serialize_document(self.document)

    def _require_projection(self) -> Projection:
        if self.document is None:
            raise MappingError("No document is loaded")
        projection = self.projection()
        if projection is None:
            raise MappingError("The document has no table section")
        return projection

    def _require_no_row_edit(self, action: str) -> None:
        if self.row_edit is not None:
            raise ValidationError(f"Apply or cancel the row edit before you {action}")
