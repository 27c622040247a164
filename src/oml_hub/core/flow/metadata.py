# SPDX-License-Identifier: Apache-2.0
"""Flow records materialized from OpenML flow documents."""

# Standard
from typing import Iterator, Optional

# Third Party
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class FlowParameter(BaseModel):
    """A hyperparameter exposed by a flow.

    Attributes
    ----------
    name : str
        Parameter name.
    data_type : Optional[str]
        Declared data type, if any.
    default_value : Optional[str]
        Default value as raw text.
    description : Optional[str]
        Human-readable description.
    recommended_range : Optional[str]
        Recommended range as raw text.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Parameter name")
    data_type: Optional[str] = Field(default=None, description="Declared data type")
    default_value: Optional[str] = Field(default=None, description="Default value")
    description: Optional[str] = Field(default=None, description="Description")
    recommended_range: Optional[str] = Field(
        default=None, description="Recommended range"
    )


class BibliographicReference(BaseModel):
    """A literature reference cited by a flow."""

    model_config = ConfigDict(frozen=True)

    citation: str = Field(..., description="Citation text")
    url: str = Field(..., description="URL of the reference")


class FlowQuality(BaseModel):
    """A name/value quality recorded against a flow."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Quality name")
    value: str = Field(..., description="Quality value as raw text")


class Flow(BaseModel):
    """Description of a machine-learning implementation registered on OpenML.

    A flow may embed other flows as named components, so instances form a
    tree. Instances are immutable; retrieval attaches a local artifact path
    through ``model_copy``.

    Attributes
    ----------
    flow_id : int
        Numeric flow id.
    uploader : Optional[int]
        Id of the uploading user.
    name, version, description, upload_date : str
        Required descriptive fields.
    external_version : Optional[str]
        Free-text version string, e.g. ``R_3.2.4-v2.b4a3f309``.
    creator, contributor, tags : List[str]
        Repeated fields in document order.
    bibliographical_reference : Optional[List[BibliographicReference]]
        None when the document cites nothing; never an empty list.
    parameters : List[FlowParameter]
        Hyperparameters in document order.
    qualities : Optional[List[FlowQuality]]
        None when the document has no qualities; never an empty list.
    source_url, source_format, source_md5 : Optional[str]
        Source artifact description.
    binary_url, binary_format, binary_md5 : Optional[str]
        Binary artifact description.
    source_path, binary_path : Optional[str]
        Local path of a downloaded artifact. At most one is set.
    components : Dict[str, Flow]
        Embedded flows keyed by component identifier, in document order.
    """

    model_config = ConfigDict(frozen=True)

    flow_id: int = Field(..., ge=0, description="Numeric flow id")
    uploader: Optional[int] = Field(default=None, description="Uploader id")
    name: str = Field(..., description="Flow name")
    version: str = Field(..., description="Repository version of the flow")
    external_version: Optional[str] = Field(
        default=None, description="Free-text external version"
    )
    description: str = Field(..., description="Short description")
    creator: list[str] = Field(default_factory=list, description="Creators")
    contributor: list[str] = Field(default_factory=list, description="Contributors")
    upload_date: str = Field(..., description="Upload timestamp")
    licence: Optional[str] = Field(default=None, description="Licence")
    language: Optional[str] = Field(default=None, description="Implementation language")
    full_description: Optional[str] = Field(default=None, description="Long description")
    installation_notes: Optional[str] = Field(
        default=None, description="Installation notes"
    )
    dependencies: Optional[str] = Field(default=None, description="Dependency spec")
    bibliographical_reference: Optional[list[BibliographicReference]] = Field(
        default=None, description="Cited literature"
    )
    implements: Optional[str] = Field(default=None, description="Implemented flow")
    parameters: list[FlowParameter] = Field(
        default_factory=list, description="Hyperparameters"
    )
    qualities: Optional[list[FlowQuality]] = Field(
        default=None, description="Flow qualities"
    )
    tags: list[str] = Field(default_factory=list, description="Tags")
    source_url: Optional[str] = None
    source_format: Optional[str] = None
    source_md5: Optional[str] = None
    source_path: Optional[str] = Field(
        default=None, description="Local path of the downloaded source artifact"
    )
    binary_url: Optional[str] = None
    binary_format: Optional[str] = None
    binary_md5: Optional[str] = None
    binary_path: Optional[str] = Field(
        default=None, description="Local path of the downloaded binary artifact"
    )
    components: dict[str, "Flow"] = Field(
        default_factory=dict, description="Embedded component flows"
    )

    @field_validator("bibliographical_reference", "qualities")
    @classmethod
    def empty_list_to_none(cls, v: Optional[list]) -> Optional[list]:
        """Represent an empty list of references or qualities as None."""
        if v is not None and len(v) == 0:
            return None
        return v

    @model_validator(mode="after")
    def validate_single_artifact(self) -> "Flow":
        """Ensure at most one artifact path is attached."""
        if self.source_path is not None and self.binary_path is not None:
            raise ValueError("Only one of source_path and binary_path may be set")
        return self

    def iter_components(self, prefix: str = "") -> Iterator[tuple[str, "Flow"]]:
        """Walk the component tree depth-first.

        Parameters
        ----------
        prefix : str, optional
            Path of this flow within an enclosing tree.

        Yields
        ------
        Tuple[str, Flow]
            Dotted identifier path and the component flow at that path.
        """
        for identifier, component in self.components.items():
            path = f"{prefix}.{identifier}" if prefix else identifier
            yield path, component
            yield from component.iter_components(path)
