"""Configuration record shared by all pipeline stages."""

from pydantic import BaseModel, ConfigDict


class ConfigurationRecord(BaseModel):
    """Operator-edited parameters consumed by parse, document, embed and ask.

    Values are free-form strings. write_in_place holds "true" or "false".
    """

    repository_path: str = ""
    output_path: str = ""
    write_in_place: str = ""
    model_identifier: str = ""
    embedding_model_identifier: str = ""
    vector_store_url: str = ""
    vector_store_collection: str = ""
    api_key: str = ""

    model_config = ConfigDict(extra="ignore", frozen=True)


FIELD_NAMES: tuple[str, ...] = tuple(ConfigurationRecord.model_fields)


class FieldDescriptor(BaseModel):
    """How a configuration field is presented to the operator."""

    name: str
    label: str
    placeholder: str = ""
    options: list[str] | None = None  # Suggestions only, never enforced


FIELD_DESCRIPTORS: tuple[FieldDescriptor, ...] = (
    FieldDescriptor(
        name="repository_path",
        label="Repository path:",
        placeholder="~/rusty-docs/src",
    ),
    FieldDescriptor(name="output_path", label="Write to JSON:"),
    FieldDescriptor(
        name="write_in_place",
        label="Write in repository:",
        options=["true", "false"],
    ),
    FieldDescriptor(name="api_key", label="OpenAI api key:", placeholder="OpenAI api key"),
    FieldDescriptor(
        name="model_identifier",
        label="LLM:",
        options=["gpt-3.5-turbo-1106", "gpt-4-1106-preview"],
    ),
    FieldDescriptor(
        name="embedding_model_identifier",
        label="Embedding model:",
        options=["text-embedding-ada-002"],
    ),
    FieldDescriptor(
        name="vector_store_url",
        label="Qdrant url:",
        placeholder="http://qdrant-db.my-qdrant:6334",
    ),
    FieldDescriptor(name="vector_store_collection", label="Qdrant collection name:"),
)


class UnknownFieldError(KeyError):
    """Raised when a field outside the configuration record is addressed."""

    def __init__(self, field: str) -> None:
        super().__init__(field)
        self.field = field

    def __str__(self) -> str:
        return f"Unknown configuration field: {self.field}"


class ConfigurationStore:
    """Owns the single mutable configuration record.

    The record itself is immutable; set() swaps in a copy with one field
    replaced, so readers always hold a consistent snapshot.
    """

    def __init__(self, defaults: ConfigurationRecord | None = None) -> None:
        self._defaults = defaults or ConfigurationRecord()
        self._record = self._defaults

    def get(self) -> ConfigurationRecord:
        """Return the current record."""
        return self._record

    def set(self, field: str, value: str) -> None:
        """Replace exactly one field, leaving all others unchanged."""
        if field not in FIELD_NAMES:
            raise UnknownFieldError(field)
        self._record = self._record.model_copy(update={field: value})

    def reset(self) -> None:
        """Restore every field to its configured default."""
        self._record = self._defaults
