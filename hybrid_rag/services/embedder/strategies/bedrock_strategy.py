"""Amazon Bedrock embedding strategy."""

import json

import boto3
import botocore.exceptions

from hybrid_rag.config.embedding.models import EmbeddingConfig
from hybrid_rag.config.settings import get_settings
from hybrid_rag.services.embedder.base import BaseEmbeddingStrategy


class BedrockEmbeddingStrategy(BaseEmbeddingStrategy):
    """
    Amazon Bedrock Titan embeddings (amazon.titan-embed-text-v1, amazon.titan-embed-text-v2:0).
    Uses IAM credentials (profile/env/instance). Region from config.region or settings.aws_region.
    Titan takes one input per request, so texts are sent one at a time.
    """

    def __init__(self) -> None:
        self._client = None
        self._client_region: str | None = None

    @property
    def strategy_name(self) -> str:
        return "bedrock"

    def _get_client(self, region: str | None):
        if self._client is None or self._client_region != region:
            self._client = boto3.client("bedrock-runtime", region_name=region)
            self._client_region = region
        return self._client

    def is_available(self, config: EmbeddingConfig) -> bool:
        return boto3.session.Session().get_credentials() is not None

    def _request_body(self, text: str, config: EmbeddingConfig) -> str:
        body: dict = {"inputText": text}
        if config.dimensions is not None and "v2" in config.model:
            body["dimensions"] = config.dimensions
        return json.dumps(body)

    def embed(self, texts: list[str], config: EmbeddingConfig) -> list[list[float]]:
        if not texts:
            return []
        client = self._get_client(config.region or get_settings().aws_region or None)
        results: list[list[float]] = []
        for text in texts:
            try:
                response = client.invoke_model(
                    modelId=config.model,
                    contentType="application/json",
                    accept="application/json",
                    body=self._request_body(text, config),
                )
            except botocore.exceptions.ClientError as e:
                raise ValueError(f"Bedrock invoke_model failed: {e}") from e
            payload = json.loads(response["body"].read().decode("utf-8"))
            emb = payload.get("embedding")
            if emb is None:
                # Titan V2 can return embeddingsByType
                emb = (payload.get("embeddingsByType") or {}).get("float")
            if not emb:
                raise ValueError("Bedrock response contained no embedding")
            results.append([float(x) for x in emb])
        return results
