from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

# --- Architecture graph (wire format consumed by the canvas) ---

ComponentType = Literal[
    "gateway",
    "service",
    "frontend",
    "backend",
    "database",
    "queue",
    "ai",
    "auth",
    "payment",
    "automation",
    "messaging",
    "search",
    "monitoring",
    "cicd",
    "security",
    "vector-db",
    "ai-model",
    "cache",
    "storage",
    "function",
    "client",
    "loadbalancer",
]

Protocol = Literal[
    "http",
    "https",
    "graphql",
    "websocket",
    "queue",
    "stream",
    "database",
    "cache",
    "oauth",
    "grpc",
]

ArchitectureMode = Literal["default", "startup", "enterprise"]
ComplexityLevel = Literal["simple", "medium", "complex"]
OperationType = Literal["create", "modify", "simplify", "remove", "extend", "optimize"]

MAX_NODES = 50


class Position(BaseModel):
    x: float
    y: float


class NodeData(BaseModel):
    # Enrichment stamps techLabel/logo; models often add validationStatus.
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    label: str
    tech: Optional[str] = None
    description: Optional[str] = None
    service_type: ComponentType = Field(alias="serviceType")
    cost_estimate: Optional[float] = Field(default=None, alias="costEstimate")


class Node(BaseModel):
    id: str
    type: ComponentType
    position: Position
    data: NodeData


class EdgeData(BaseModel):
    protocol: Optional[Protocol] = None
    label: Optional[str] = None
    latency: Optional[float] = None


class Edge(BaseModel):
    id: str
    source: str
    target: str
    animated: Optional[bool] = None
    data: Optional[EdgeData] = None


class ArchitectureMetadata(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    architecture_type: Optional[str] = Field(default=None, alias="architectureType")
    complexity: Optional[ComplexityLevel] = None
    total_cost: Optional[float] = Field(default=None, alias="totalCost")
    reasoning: Optional[str] = None


class Architecture(BaseModel):
    """A generated architecture graph.

    Every edge must reference existing node ids; node and edge ids are unique.
    """

    nodes: List[Node] = Field(min_length=1, max_length=MAX_NODES)
    edges: List[Edge] = Field(default_factory=list)
    metadata: Optional[ArchitectureMetadata] = None

    @model_validator(mode="after")
    def check_references(self) -> "Architecture":
        node_ids = [n.id for n in self.nodes]
        if len(set(node_ids)) != len(node_ids):
            raise ValueError("node ids must be unique")
        edge_ids = [e.id for e in self.edges]
        if len(set(edge_ids)) != len(edge_ids):
            raise ValueError("edge ids must be unique")

        known = set(node_ids)
        for edge in self.edges:
            if edge.source not in known:
                raise ValueError(f"edge '{edge.id}' references unknown source '{edge.source}'")
            if edge.target not in known:
                raise ValueError(f"edge '{edge.id}' references unknown target '{edge.target}'")
        return self

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


# --- Streaming ---


class StreamChunk(BaseModel):
    """One piece of streamed model output."""

    type: Literal["content", "reasoning"] = "content"
    text: str


# --- Provider configuration ---


class ProviderDescriptor(BaseModel):
    """Immutable connection parameters for one model provider."""

    model_config = ConfigDict(frozen=True)

    id: str
    base_url: str
    api_key: Optional[str] = Field(default=None, repr=False)
    model: str
    request_params: Dict[str, Any] = Field(default_factory=dict)
    headers: Dict[str, str] = Field(default_factory=dict)
    timeout: float = 30.0

    @property
    def has_credential(self) -> bool:
        return bool(self.api_key)


class ModelInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    provider: str
    model: str
    description: str = ""
    supports_streaming: bool = True


# --- Generation request ---


class ConversationTurn(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class UserPreferences(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    cloud_providers: List[str] = Field(default_factory=list, alias="cloudProviders")
    languages: List[str] = Field(default_factory=list)
    frameworks: List[str] = Field(default_factory=list)
    architecture_types: List[str] = Field(default_factory=list, alias="architectureTypes")
    application_type: List[str] = Field(default_factory=list, alias="applicationType")
    custom_instructions: Optional[str] = Field(default=None, alias="customInstructions")
    # Legacy single-value fields
    cloud_provider: Optional[str] = Field(default=None, alias="cloudProvider")
    language: Optional[str] = None
    framework: Optional[str] = None


class GenerateRequest(BaseModel):
    """Body of the generation endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    prompt: str
    model: Optional[str] = None
    mode: ArchitectureMode = "default"
    current_nodes: List[Dict[str, Any]] = Field(default_factory=list, alias="currentNodes")
    current_edges: List[Dict[str, Any]] = Field(default_factory=list, alias="currentEdges")
    quick_mode: bool = Field(default=False, alias="quickMode")
    conversation_history: List[ConversationTurn] = Field(
        default_factory=list, alias="conversationHistory"
    )
    user_preferences: Optional[UserPreferences] = Field(default=None, alias="userPreferences")
