"""Embedding configuration models. Read-only; no business logic."""

from pydantic import BaseModel, Field


class EmbeddingPreprocessing(BaseModel):
    """Text preprocessing applied before a strategy sees the input."""

    lowercase: bool = Field(default=False)
    remove_punctuation: bool = Field(default=False)
    max_length: int = Field(default=8192, ge=1)


class EmbeddingConfig(BaseModel):
    """Embedding strategy and parameters."""

    strategy: str = Field(..., description="openai|sentence_transformers|bedrock|mock")
    model: str = Field(..., description="Model identifier")
    normalize: bool = Field(default=True)
    normalization_type: str = Field(default="L2", description="L2|L1|none")
    preprocessing: EmbeddingPreprocessing = Field(default_factory=EmbeddingPreprocessing)
    batch_size: int = Field(default=100, ge=1, description="Texts per provider call (capped at 100)")
    api_key: str | None = Field(default=None, description="OpenAI API key when strategy is openai")
    region: str | None = Field(default=None, description="AWS region when strategy is bedrock")
    dimensions: int | None = Field(
        default=None, ge=1, description="Requested output dimension for models that support shortening"
    )
