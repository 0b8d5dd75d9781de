"""Pipeline stages and their static registry."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum

from pipeline_console.domain.entities.configuration import ConfigurationRecord


class Stage(str, Enum):
    """The four pipeline steps, in pipeline order."""

    PARSE = "parse"
    DOCUMENT = "document"
    EMBED = "embed"
    ASK = "ask"

    @property
    def ordinal(self) -> int:
        return list(Stage).index(self)

    @classmethod
    def from_value(cls, value: "str | int | Stage") -> "Stage":
        """Resolve a stage from its name, ordinal or value."""
        if isinstance(value, Stage):
            return value
        if isinstance(value, int):
            stages = list(Stage)
            if not 0 <= value < len(stages):
                raise UnknownStageError(str(value))
            return stages[value]
        try:
            return cls(value.lower())
        except ValueError:
            raise UnknownStageError(value) from None


class UnknownStageError(ValueError):
    """Raised when a stage name or ordinal does not match any stage."""

    def __init__(self, stage: str) -> None:
        super().__init__(f"Unknown stage: {stage}")
        self.stage = stage


RequestBody = dict[str, str]
Projection = Callable[[ConfigurationRecord, Mapping[str, str]], RequestBody]


def _project_parse(config: ConfigurationRecord, extra: Mapping[str, str]) -> RequestBody:
    return {
        "repository_path": config.repository_path,
        "output_path": config.output_path,
    }


def _project_document(config: ConfigurationRecord, extra: Mapping[str, str]) -> RequestBody:
    return {
        "model_identifier": config.model_identifier,
        "api_key": config.api_key,
        "repository_path": config.repository_path,
        "write_in_place": config.write_in_place,
        "output_path": config.output_path,
    }


def _project_embed(config: ConfigurationRecord, extra: Mapping[str, str]) -> RequestBody:
    return {
        "embedding_model_identifier": config.embedding_model_identifier,
        "api_key": config.api_key,
        "repository_path": config.repository_path,
        "vector_store_collection": config.vector_store_collection,
        "vector_store_url": config.vector_store_url,
    }


def _project_ask(config: ConfigurationRecord, extra: Mapping[str, str]) -> RequestBody:
    return {
        "model_identifier": config.model_identifier,
        "embedding_model_identifier": config.embedding_model_identifier,
        "api_key": config.api_key,
        "vector_store_collection": config.vector_store_collection,
        "vector_store_url": config.vector_store_url,
        "user_question": extra.get("user_question", ""),
    }


@dataclass(frozen=True)
class StageSpec:
    """One registry row: what a stage needs, where it goes, how it is explained."""

    stage: Stage
    title: str
    endpoint: str
    required_fields: tuple[str, ...]
    projection: Projection
    action_label: str
    guide: str
    steps: tuple[str, ...] = field(default_factory=tuple)


STAGE_REGISTRY: dict[Stage, StageSpec] = {
    Stage.PARSE: StageSpec(
        stage=Stage.PARSE,
        title="Parse",
        endpoint="parse",
        required_fields=("repository_path", "output_path"),
        projection=_project_parse,
        action_label="Parse your repo",
        guide=(
            "This is the starting point of your journey with rusty-docs. Here, you can "
            "analyze and parse your Rust repository, gaining insights into its structure "
            "and components. Utilize the powerful parsing engine to extract information "
            "about structs, functions, traits, and more. Once parsed, you'll have a "
            "structured JSON representation of the repository's code elements."
        ),
        steps=(
            "Enter the path to the Rust repository you want to analyze.",
            "Define the output destination for the parsed data.",
            'Click the "Parse" button to initiate the parsing process.',
        ),
    ),
    Stage.DOCUMENT: StageSpec(
        stage=Stage.DOCUMENT,
        title="Document",
        endpoint="document",
        required_fields=(
            "repository_path",
            "output_path",
            "write_in_place",
            "api_key",
            "model_identifier",
        ),
        projection=_project_document,
        action_label="Document your repo",
        guide=(
            "The Document section empowers you to generate documentation for your Rust "
            "code effortlessly. Leverage rusty-docs documentation generation feature to "
            "create well-organized and detailed documentation for each code element. The "
            "generated documentation can be seamlessly inserted into the respective "
            "locations in your repository."
        ),
        steps=(
            "Enter the path to the Rust repository you want to document.",
            "Define the output destination for the parsed data including documentation.",
            'Through the "Write in repository" setting, you can choose whether to '
            "automatically insert the produced documentation in the right place in your code.",
            "Customize your LLM preferences.",
            'Click the "Generate Documentation" button to create documentation for your Rust code.',
        ),
    ),
    Stage.EMBED: StageSpec(
        stage=Stage.EMBED,
        title="Embed",
        endpoint="embed",
        required_fields=(
            "repository_path",
            "embedding_model_identifier",
            "vector_store_url",
            "vector_store_collection",
        ),
        projection=_project_embed,
        action_label="Embed your repo on Qdrant",
        guide=(
            "In this section, you can create embeddings from your repository code "
            "elements and store them on Qdrant."
        ),
        steps=(
            "Start your Qdrant server.",
            "Configure Qdrant (collection name, url) and LLM settings.",
            'Click the "Create Embeddings" button to generate embeddings for your code '
            "elements. For better results do this after completing your repository documentation.",
        ),
    ),
    Stage.ASK: StageSpec(
        stage=Stage.ASK,
        title="Ask",
        endpoint="ask",
        required_fields=(
            "api_key",
            "model_identifier",
            "embedding_model_identifier",
            "vector_store_url",
            "vector_store_collection",
        ),
        projection=_project_ask,
        action_label="Ask Jon about your repo",
        guide=(
            "Open up a dialogue between you and Jon to gain insights, ask about "
            "functionalities, and explore the knowledge stored in the repository and the "
            "associated knowledge graph."
        ),
        steps=(
            "Store the repository embeddings on Qdrant.",
            "Customize your LLM preferences.",
            'Click the "Ask the Model" button to show the chat.',
            "Pose questions about your repository's code and functionalities.",
        ),
    ),
}

_unregistered = set(Stage) - set(STAGE_REGISTRY)
if _unregistered:
    raise RuntimeError(f"Stages without a registry entry: {sorted(s.value for s in _unregistered)}")


def get_spec(stage: Stage) -> StageSpec:
    """Return the registry row for a stage."""
    return STAGE_REGISTRY[stage]


def required_fields(stage: Stage) -> tuple[str, ...]:
    """Fields that must be non-empty before the stage may run."""
    return STAGE_REGISTRY[stage].required_fields


def project(
    stage: Stage,
    config: ConfigurationRecord,
    extra: Mapping[str, str] | None = None,
) -> RequestBody:
    """Build the stage's request body from the configuration record.

    Total over any record: empty fields project as empty strings.
    """
    return STAGE_REGISTRY[stage].projection(config, extra or {})
