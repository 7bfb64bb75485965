"""Keyword tables driving archetype, complexity and operation detection.

Adding an archetype means adding an entry to ARCHITECTURE_PATTERNS and
FOLLOW_UP_QUESTIONS; the detector has no per-archetype code.
Multi-word phrases score 2 points, single words 1.
"""

ARCHITECTURE_PATTERNS = {
    "web-app": [
        "web app",
        "website",
        "web application",
        "frontend",
        "fullstack",
        "nextjs",
        "react",
        "vue",
        "angular",
        "dashboard",
        "portal",
        "saas",
        "e-commerce",
        "blog",
        "cms",
    ],
    "ai-pipeline": [
        "ai",
        "machine learning",
        "ml",
        "deep learning",
        "llm",
        "gpt",
        "openai",
        "anthropic",
        "vector database",
        "embedding",
        "rag",
        "inference",
        "model serving",
        "training",
        "ai pipeline",
        "ml pipeline",
        "gpu",
        "tensorflow",
        "pytorch",
    ],
    "microservices": [
        "microservices",
        "micro-service",
        "distributed",
        "service mesh",
        "kubernetes",
        "k8s",
        "docker",
        "container",
        "grpc",
        "service discovery",
        "api gateway",
        "event-driven",
        "message queue",
        "kafka",
        "rabbitmq",
    ],
    "monolithic": [
        "monolithic",
        "monolith",
        "single application",
        "mvc",
        "django",
        "rails",
        "laravel",
        "spring boot",
        "express",
        "fastify",
    ],
    "serverless": [
        "serverless",
        "lambda",
        "cloudflare workers",
        "vercel edge",
        "netlify functions",
        "faas",
        "function as a service",
        "edge computing",
    ],
    "data-pipeline": [
        "data pipeline",
        "etl",
        "elt",
        "data warehouse",
        "data lake",
        "apache airflow",
        "spark",
        "kafka streaming",
        "real-time analytics",
        "batch processing",
    ],
    "mobile-app": [
        "mobile app",
        "ios app",
        "android app",
        "react native",
        "flutter",
        "swift",
        "kotlin",
        "cross-platform mobile",
        "pwa",
    ],
    "desktop-app": [
        "desktop app",
        "desktop software",
        "electron",
        "tauri",
        "wails",
        "native desktop",
        "windows app",
        "macos app",
        "linux app",
    ],
    "iot-system": [
        "iot",
        "internet of things",
        "mqtt",
        "sensor",
        "device management",
        "edge device",
        "embedded",
        "hardware",
        "raspberry pi",
        "arduino",
    ],
    "blockchain": [
        "blockchain",
        "smart contract",
        "web3",
        "defi",
        "nft",
        "ethereum",
        "solana",
        "polygon",
        "solidity",
        "cryptocurrency",
    ],
    "mixed": ["hybrid", "mixed", "multiple systems", "complex ecosystem"],
}

FOLLOW_UP_QUESTIONS = {
    "web-app": [
        "What's the expected traffic volume?",
        "Do you need real-time features?",
        "Any specific tech preferences?",
    ],
    "ai-pipeline": [
        "What's the model size/complexity?",
        "Batch or real-time inference?",
        "GPU requirements?",
    ],
    "microservices": [
        "How many services approximately?",
        "Synchronous or async communication?",
        "Existing tech stack?",
    ],
    "monolithic": [
        "Team size?",
        "Expected scale in 1 year?",
        "Monolith-first or migration?",
    ],
    "serverless": [
        "Cold start tolerance?",
        "Expected request volume?",
        "Stateful or stateless?",
    ],
    "data-pipeline": [
        "Data volume (GB/TB/PB)?",
        "Batch or streaming?",
        "Real-time requirements?",
    ],
    "mobile-app": [
        "Native or cross-platform?",
        "Offline capabilities needed?",
        "Push notifications?",
    ],
    "desktop-app": ["Which platforms?", "Auto-update needed?", "Local database?"],
    "iot-system": [
        "Number of devices?",
        "Data frequency?",
        "Edge computing needs?",
    ],
    "blockchain": [
        "Public or private chain?",
        "Smart contracts needed?",
        "Expected TPS?",
    ],
    "mixed": [
        "Can you clarify the primary use case?",
        "Which aspect is most critical?",
    ],
    "unknown": [
        "Could you describe what you're building in more detail?",
        "Is this for web, mobile, or something else?",
        "What's the main problem you're solving?",
    ],
}

# Checked in this order; the first tier with a hit wins
COMPLEXITY_INDICATORS = {
    "complex": [
        "microservices",
        "enterprise",
        "distributed",
        "scalable",
        "high availability",
        "kubernetes",
        "multi-tenant",
        "platform",
        "infrastructure",
        "ai pipeline",
        "data pipeline",
    ],
    "simple": [
        "todo",
        "blog",
        "simple",
        "basic",
        "small",
        "personal",
        "portfolio",
        "landing page",
        "static",
        "single page",
        "crud",
        "notes",
        "bookmark",
        "url shortener",
    ],
    "medium": [
        "e-commerce",
        "saas",
        "dashboard",
        "crm",
        "cms",
        "marketplace",
        "social",
        "chat",
        "messaging",
        "analytics",
        "booking",
        "reservation",
        "payment",
    ],
}

# Checked in this order when a graph already exists
OPERATION_KEYWORDS = {
    "simplify": [
        "simplify",
        "simpler",
        "less complex",
        "reduce complexity",
        "make it simpler",
        "easier",
        "basic",
        "minimal",
        "stripped down",
        "streamline",
    ],
    "remove": [
        "remove",
        "delete",
        "drop",
        "get rid of",
        "take out",
        "eliminate",
        "without",
        "no more",
        "ditch",
    ],
    "extend": [
        "add",
        "include",
        "insert",
        "put in",
        "extension",
        "expand",
        "more",
        "additional",
        "extra",
        "also need",
        "as well",
        "plus",
    ],
    "optimize": [
        "optimize",
        "improve",
        "better",
        "faster",
        "cheaper",
        "efficient",
        "performance",
        "scale",
        "upgrade",
        "enhance",
    ],
    "modify": [
        "change",
        "update",
        "modify",
        "replace",
        "switch",
        "instead",
        "different",
        "make it",
        "convert",
        "transform",
    ],
}

OPERATION_INSTRUCTIONS = {
    "create": (
        "Create a completely new architecture from scratch based on the user's requirements. "
        "Generate all necessary components from the ground up."
    ),
    "modify": (
        "Modify the existing architecture while preserving its core structure. "
        "Make targeted changes as requested while maintaining overall integrity."
    ),
    "simplify": (
        "Simplify the existing architecture by removing non-essential components and reducing complexity. "
        "Focus on core functionality while maintaining the same basic capabilities. "
        "Remove redundancy, consolidate services, and use simpler alternatives where appropriate. "
        "You MAY go below the normal minimum component count for simplification."
    ),
    "remove": (
        "Remove the specified components from the existing architecture. "
        "Ensure the remaining components can still function correctly without the removed parts. "
        "Update connections and dependencies as needed."
    ),
    "extend": (
        "Add new components to the existing architecture while preserving all current functionality. "
        "Integrate new services seamlessly with existing ones. "
        "Maintain consistency with the current architecture style and patterns."
    ),
    "optimize": (
        "Optimize the existing architecture for better performance, cost, or scalability. "
        "Keep the same components but improve their configuration, connections, or deployment strategy. "
        "Focus on efficiency gains."
    ),
}

# (min_adjustment, max_adjustment) applied to the mode's component bounds
COMPONENT_COUNT_ADJUSTMENTS = {
    "simplify": (-2, -3),
    "remove": (-1, 0),
    "extend": (0, 2),
}

ARCHITECTURE_GUIDELINES = {
    "web-app": """Web Application Architecture:
- Layer 1: CDN (Cloudflare) -> Load Balancer -> Frontend (Next.js/React/Vue)
- Layer 2: API Gateway -> Auth Service -> Business Logic (Express/Fastify)
- Layer 3: Primary Database (PostgreSQL) -> Cache (Redis) -> Object Storage (S3)""",
    "ai-pipeline": """AI/ML Pipeline Architecture:
- Layer 1: API Gateway -> Model Gateway -> Rate Limiting
- Layer 2: Inference Service (GPU) -> Queue (Kafka/SQS) -> Training Pipeline
- Layer 3: Vector DB (Pinecone/pgvector) -> Object Storage (S3) -> Monitoring""",
    "microservices": """Microservices Architecture:
- Layer 1: API Gateway (Kong/AWS) -> Service Mesh (optional)
- Layer 2: Service Discovery -> Auth Service -> Business Services
- Layer 3: Message Bus (Kafka) -> Event Store -> Polyglot Persistence""",
    "monolithic": """Monolithic Architecture:
- Layer 1: CDN -> Load Balancer -> Application Server
- Layer 2: Monolithic App (Django/Rails/Laravel/Next.js)
- Layer 3: Primary DB -> Cache -> Background Job Queue""",
    "serverless": """Serverless Architecture:
- Layer 1: CDN -> API Gateway -> Authentication
- Layer 2: Functions (Lambda/Cloudflare Workers/Vercel)
- Layer 3: Managed DB (DynamoDB/PlanetScale) -> Object Storage""",
    "data-pipeline": """Data Pipeline Architecture:
- Layer 1: Ingestion (Kafka/Kinesis/API) -> Validation
- Layer 2: Processing (Spark/dbt/Airflow) -> Transform
- Layer 3: Warehouse (Snowflake/BigQuery) -> Analytics -> Visualization""",
    "mobile-app": """Mobile Application Architecture:
- Layer 1: CDN -> API Gateway -> Push Notification Service
- Layer 2: Backend API -> Auth -> Business Logic
- Layer 3: Database -> File Storage -> Analytics""",
    "desktop-app": """Desktop Application Architecture:
- Layer 1: Auto-update Service -> Analytics
- Layer 2: Desktop App (Electron/Tauri) -> Local State
- Layer 3: Sync Service -> Cloud Backup -> Local DB (SQLite)""",
    "iot-system": """IoT System Architecture:
- Layer 1: Device Gateway (MQTT/CoAP) -> Protocol Adapter
- Layer 2: Device Management -> Rules Engine -> Edge Computing
- Layer 3: Time-Series DB (InfluxDB) -> Analytics -> Dashboard""",
    "blockchain": """Blockchain Architecture:
- Layer 1: Wallet Interface -> DApp Frontend -> Indexer
- Layer 2: Smart Contracts -> Node RPC (Infura/Alchemy)
- Layer 3: Event Indexer (The Graph) -> Off-chain Storage""",
    "mixed": """Mixed Architecture:
Identify primary pattern and apply its guidelines. Use API Gateway to bridge different patterns if needed.""",
    "unknown": """General Architecture:
Start with simple 3-tier: Frontend -> API -> Database. Add components based on scale requirements.""",
}

COMPLEXITY_GUIDELINES = {
    "simple": """COMPLEXITY: SIMPLE (3-5 components max)
- Minimal infrastructure
- Single database sufficient
- No message queues unless explicitly requested
- Simple auth (managed service)
- Skip CDN for truly simple apps (< 1000 users)""",
    "medium": """COMPLEXITY: MEDIUM (4-7 components)
- Include CDN for static assets
- Add Redis cache for performance
- Include monitoring basics
- Proper auth service separation
- Add message queue if async processing needed""",
    "complex": """COMPLEXITY: COMPLEX (6-12 components)
- Full microservices or highly scalable monolith
- Multiple data stores (primary + cache + search)
- Message queues for async processing
- Load balancing and auto-scaling
- Comprehensive observability
- Security layers (WAF, encryption)""",
}
