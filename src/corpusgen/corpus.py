"""Corpus driver: repeat a generator until a byte budget is met.

Every emitted record is followed by a newline.  Without a template each record
is a JSON object and may be preceded by a bulk ``create`` action line naming
the target index, giving a file that can be posted to a ``_bulk`` endpoint as
is.  File names are prefixed with a Unix timestamp so successive runs do not
collide.
"""

from __future__ import annotations

import io
import json
import os
import time
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import BinaryIO

from .config import Config
from .genlib import Field, GenState, TemplateType, load_fields, new_generator_for
from .utils.errors import ConfigurationError, WriteError
from .utils.logging import get_logger
from .utils.size import parse_size

__all__ = [
    "CORPUS_DIR_MODE",
    "CORPUS_FILE_MODE",
    "GeneratorCorpus",
    "bulk_create_action",
    "sanitize_filename",
]

log = get_logger(__name__)

CORPUS_DIR_MODE = 0o770
CORPUS_FILE_MODE = 0o660

Timestamp = Callable[[], float]


def sanitize_filename(name: str) -> str:
    """Replace characters that are unsafe in file names with ``-``.

    Only spaces, colons and path separators are handled; this is not a
    general escaping routine.
    """

    for ch in (" ", ":", "/", "\\"):
        name = name.replace(ch, "-")
    return name


def bulk_create_action(index: str) -> bytes:
    """Return the bulk ``create`` action line for ``index``."""

    return json.dumps({"create": {"_index": index}}).encode("utf-8") + b"\n"


class GeneratorCorpus:
    """Write generated corpora below ``location``."""

    def __init__(
        self,
        config: Config | None = None,
        location: str | os.PathLike[str] = ".",
        *,
        template_type: str | TemplateType = TemplateType.PLACEHOLDER,
        seed: int | str | bytes | None = None,
        timestamp: Timestamp = time.time,
    ) -> None:
        self.config: Config = config if config is not None else Config([])
        self.location = Path(location)
        self.template_type = TemplateType.parse(template_type)
        self.seed = seed
        self.timestamp = timestamp

    # -- naming ------------------------------------------------------------

    def bulk_payload_filename(self, slug: str) -> str:
        return f"{int(self.timestamp())}-{sanitize_filename(slug)}.ndjson"

    def bulk_payload_filename_with_template(self, template_path: str | os.PathLike[str]) -> str:
        path = Path(template_path)
        return f"{int(self.timestamp())}-{sanitize_filename(path.stem)}{sanitize_filename(path.suffix)}"

    # -- generation --------------------------------------------------------

    def events_payload_from_fields(
        self,
        template: bytes | None,
        fields: Sequence[Field],
        tot_size: int,
        create_payload: bytes,
        sink: BinaryIO,
    ) -> int:
        """Emit records into ``sink`` until ``tot_size`` bytes are written.

        Returns the number of bytes written, which overshoots ``tot_size`` by
        less than one record.
        """

        state = GenState(self.seed)
        buf = io.BytesIO()
        written = 0
        with new_generator_for(self.template_type, template, self.config, fields) as generator:
            while written < tot_size:
                buf.seek(0)
                buf.truncate()
                buf.write(create_payload)
                generator.emit(state, buf)
                buf.write(b"\n")
                data = buf.getvalue()
                try:
                    sink.write(data)
                except OSError as exc:
                    raise WriteError(str(exc)) from exc
                written += len(data)
        return written

    def _open(self, filename: str) -> tuple[Path, BinaryIO]:
        self.location.mkdir(mode=CORPUS_DIR_MODE, parents=True, exist_ok=True)
        path = self.location / filename
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, CORPUS_FILE_MODE)
        return path, os.fdopen(fd, "wb")

    def generate(
        self,
        fields_path: str | os.PathLike[str],
        tot_size: int | str,
        *,
        index: str | None = None,
    ) -> Path:
        """Generate a JSON-lines corpus from the fields in ``fields_path``.

        When ``index`` is given every record is preceded by a bulk ``create``
        action for it.
        """

        budget = parse_size(tot_size) if isinstance(tot_size, str) else tot_size
        fields = load_fields(fields_path)
        create_payload = bulk_create_action(index) if index else b""
        path, f = self._open(self.bulk_payload_filename(Path(fields_path).stem))
        log.info("generating %s (%d bytes, %d fields)", path, budget, len(fields))
        with f:
            written = self.events_payload_from_fields(None, fields, budget, create_payload, f)
        log.info("wrote %d bytes to %s", written, path)
        return path

    def generate_with_template(
        self,
        template_path: str | os.PathLike[str],
        fields_path: str | os.PathLike[str],
        tot_size: int | str,
    ) -> Path:
        """Generate a corpus rendering the template at ``template_path``."""

        budget = parse_size(tot_size) if isinstance(tot_size, str) else tot_size
        template = Path(template_path).read_bytes()
        if not template:
            raise ConfigurationError("template must not be empty")
        fields = load_fields(fields_path)
        path, f = self._open(self.bulk_payload_filename_with_template(template_path))
        log.info(
            "generating %s from %s template (%d bytes)", path, self.template_type.value, budget
        )
        with f:
            written = self.events_payload_from_fields(template, fields, budget, b"", f)
        log.info("wrote %d bytes to %s", written, path)
        return path
