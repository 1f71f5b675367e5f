from pydantic import BaseModel

class EnrichmentRunResult(BaseModel):
    skipped: bool = False
    total_nodes: int = 0
    online_nodes: int = 0
    enriched_nodes: int = 0
    failed_nodes: int = 0
    batches: int = 0
    duration_seconds: float = 0.0
