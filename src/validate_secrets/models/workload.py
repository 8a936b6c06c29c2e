"""
Pydantic models for the parts of a Pod that can reference secrets.

Only the fields needed to find secret references are modelled; everything
else in the object is ignored. Field names use snake_case in Python and
camelCase aliases matching the Kubernetes API.
"""

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class _WorkloadModel(BaseModel):
    """Base configuration shared by all workload models."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    @field_validator("*", mode="before")
    @classmethod
    def null_as_default(cls, value, info: ValidationInfo):
        # The API server sends explicit nulls for empty lists and objects
        field = cls.model_fields[info.field_name]
        if value is None and field.default_factory is not None:
            return field.default_factory()
        return value


class SecretVolumeSource(_WorkloadModel):
    """Secret mounted as a volume."""

    secret_name: str = Field("", alias="secretName")
    optional: bool | None = None


class Volume(_WorkloadModel):
    """Pod volume; only the secret source is relevant here."""

    name: str = ""
    secret: SecretVolumeSource | None = None


class SecretEnvSource(_WorkloadModel):
    """Secret whose keys are all exposed as environment variables."""

    name: str = ""
    optional: bool | None = None


class EnvFromSource(_WorkloadModel):
    """Bulk environment source of a container."""

    prefix: str | None = None
    secret_ref: SecretEnvSource | None = Field(None, alias="secretRef")


class SecretKeySelector(_WorkloadModel):
    """Single key of a secret."""

    name: str = ""
    key: str = ""
    optional: bool | None = None


class EnvVarSource(_WorkloadModel):
    """Source for an environment variable's value."""

    secret_key_ref: SecretKeySelector | None = Field(None, alias="secretKeyRef")


class EnvVar(_WorkloadModel):
    """Single container environment variable."""

    name: str = ""
    value_from: EnvVarSource | None = Field(None, alias="valueFrom")


class Container(_WorkloadModel):
    """Container of a pod."""

    name: str = ""
    env_from: list[EnvFromSource] = Field(default_factory=list, alias="envFrom")
    env: list[EnvVar] = Field(default_factory=list)


class PodSpec(_WorkloadModel):
    """Pod specification."""

    volumes: list[Volume] = Field(default_factory=list)
    containers: list[Container] = Field(default_factory=list)


class Pod(_WorkloadModel):
    """Pod object as submitted to the API server."""

    api_version: str | None = Field(None, alias="apiVersion")
    kind: str | None = None
    spec: PodSpec = Field(default_factory=PodSpec)
