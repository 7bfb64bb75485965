"""Generation modes and the framework rules embedded in every prompt."""

MODE_CONSTRAINTS = {
    "default": {
        "min_components": 4,
        "max_components": 10,
        "prefer_full_stack": False,
        "require_cdn": True,
        "require_load_balancer": False,
        "require_observability": True,
        "cost_focus": "balanced",
        "description": (
            "Default (Balanced) - Production-ready with balanced accuracy, comprehensiveness, "
            "and efficiency. Best for most use cases."
        ),
        "focus": "Balanced approach - accuracy, speed, and completeness",
    },
    "startup": {
        "min_components": 3,
        "max_components": 5,
        "prefer_full_stack": True,
        "require_cdn": False,
        "require_load_balancer": False,
        "require_observability": False,
        "cost_focus": "low",
        "description": (
            "Startup MVP - Ship fast, validate ideas, minimize costs. "
            "Use managed services with free tiers."
        ),
        "focus": "Speed to market, cost optimization, rapid iteration",
    },
    "enterprise": {
        "min_components": 6,
        "max_components": 20,
        "prefer_full_stack": False,
        "require_cdn": True,
        "require_load_balancer": True,
        "require_observability": True,
        "cost_focus": "high",
        "description": (
            "Enterprise - Multi-region, compliant, resilient architecture. "
            "Full observability, security, and governance."
        ),
        "focus": "Global scale, compliance (SOC2/GDPR), high availability",
    },
}

MODE_GUIDELINES = {
    "default": [
        "Balance between simplicity and best practices",
        "Use CDN for static assets",
        "Include basic monitoring",
        "Right-size infrastructure for expected scale",
    ],
    "startup": [
        "PREFER FULL-STACK FRAMEWORKS (Next.js, Laravel, Django, Rails, AdonisJS)",
        "AVOID unnecessary infrastructure (skip CDN, Load Balancer for simple apps)",
        "Focus on SPEED and COST (use managed services, avoid self-hosted)",
        "Single database is fine (no need for separate cache layer for small apps)",
        "Simple auth solution (Clerk, Supabase Auth, not self-hosted)",
    ],
    "enterprise": [
        "REQUIRE full redundancy and failover",
        "Include monitoring/observability (Datadog, New Relic, or Grafana)",
        "Separate concerns (frontend/backend)",
        "Include CDN and Load Balancer",
        "Security-first approach (WAF, encryption at rest/transit)",
        "Compliance considerations (GDPR, SOC2)",
    ],
}

FRAMEWORK_GROUPS = {
    "fullstack": ["nextjs", "nuxt", "sveltekit", "remix", "blitz"],
    "backend": ["express", "fastify", "nestjs", "hono", "elysia", "koa"],
    "traditional": ["laravel", "django", "rails", "spring", "adonisjs"],
    "frontend": ["react", "vue", "angular", "svelte"],
}

# Groups whose members must never appear together in one architecture
INCOMPATIBLE_PAIRS = [
    ("fullstack", "backend"),
    ("traditional", "backend"),
    ("traditional", "fullstack"),
]

CORRECT_APPROACHES = [
    "Full-stack single framework: Next.js, Laravel, Django or AdonisJS handles frontend and backend",
    "Frontend + Backend separation: React + Express, Vue + Fastify, React + Hono, Svelte + Elysia",
    "API-only backend: Express, Fastify, Hono or Elysia",
]

TECHNOLOGY_IDS = {
    "Full-stack": "nextjs, nuxt, sveltekit, laravel, django, rails, adonisjs",
    "Frontend": "react, vue, angular, svelte",
    "Backend": "express, fastify, nestjs, hono, elysia",
    "Database": "postgresql, mysql, mongodb, redis, sqlite",
    "Cloud": "aws, vercel, railway, render, cloudflare",
    "AI/ML": "openai, anthropic, pinecone, weaviate",
    "Auth": "clerk, auth0, firebase-auth",
    "Cache": "redis, memcached",
    "Queue": "rabbitmq, kafka, sqs",
    "Storage": "s3, cloudflare-r2",
    "Monitoring": "datadog, newrelic, grafana",
}

# mode -> archetype -> recommended stack lines
TECH_RECOMMENDATIONS = {
    "startup": {
        "web-app": [
            "Full-stack: Next.js (Vercel), Laravel (Railway), Django (Render)",
            "Database: PostgreSQL (managed), SQLite (very small apps)",
            "Auth: Clerk, Supabase Auth, NextAuth.js",
            "Storage: Cloudflare R2 (free egress), Supabase Storage",
        ],
        "ai-pipeline": [
            "Models: OpenAI API, Anthropic Claude (pay per use)",
            "Vector DB: Supabase pgvector (free tier), Pinecone (starter)",
            "Queue: Upstash Redis, Cloudflare Queues",
        ],
        "microservices": [
            "Consider monolith first! If microservices needed:",
            "Orchestration: Railway, Render (managed containers)",
            "Avoid Kubernetes (overkill for startups)",
        ],
        "monolithic": [
            "Framework: Next.js, Laravel, Django, AdonisJS, Ruby on Rails",
            "Database: PostgreSQL (managed)",
            "Hosting: Vercel, Railway, Render, Fly.io",
        ],
        "serverless": [
            "Functions: Vercel Functions, Cloudflare Workers, Netlify Functions",
            "Database: PlanetScale (MySQL), Supabase (PostgreSQL)",
            "Auth: Clerk, Auth0 (free tier)",
        ],
        "data-pipeline": [
            "Orchestration: Airflow (managed), Prefect Cloud (free tier)",
            "Processing: Python + Pandas (small data), DuckDB",
            "Warehouse: BigQuery (sandbox), Snowflake (trial)",
        ],
        "mobile-app": [
            "Cross-platform: React Native (Expo), Flutter",
            "Backend: Firebase, Supabase (backend-as-a-service)",
            "Push: Firebase Cloud Messaging (free)",
        ],
        "desktop-app": [
            "Framework: Tauri (Rust, small bundle), Wails (Go)",
            "Updates: Tauri built-in updater",
            "Local DB: SQLite, libSQL (Turso)",
        ],
        "iot-system": [
            "Gateway: AWS IoT Core (pay per message), EMQX Cloud",
            "Protocol: MQTT (lightweight)",
            "Database: InfluxDB Cloud (time-series)",
        ],
        "blockchain": [
            "Network: Polygon (cheap), Base, Arbitrum",
            "Smart Contracts: Solidity, Hardhat",
            "RPC: Alchemy (free tier), Infura",
        ],
        "mixed": [
            "Focus on ONE primary stack",
            "Use managed services over self-hosted",
        ],
        "unknown": [
            "Safest choice: Next.js + PostgreSQL + Vercel",
            "Alternative: Laravel + MySQL + Railway",
        ],
    },
    "default": {
        "web-app": [
            "Frontend: Next.js, React, Vue, Angular",
            "Backend: Node.js/Express, Python/FastAPI, Go",
            "Database: PostgreSQL (primary), Redis (cache)",
            "CDN: Cloudflare or AWS CloudFront",
        ],
        "ai-pipeline": [
            "API Gateway: Kong, AWS API Gateway",
            "AI/ML: OpenAI, Anthropic, self-hosted models",
            "Vector DB: Pinecone, Weaviate, pgvector",
            "Message Queue: Kafka, RabbitMQ, AWS SQS",
        ],
        "microservices": [
            "API Gateway: Kong, Ambassador, AWS API Gateway",
            "Container Orchestration: Kubernetes",
            "Message Bus: Kafka, NATS, or RabbitMQ",
            "Monitoring: Prometheus + Grafana + Jaeger",
        ],
        "monolithic": [
            "Framework: Next.js, Django, Rails, Laravel, Spring Boot",
            "Database: PostgreSQL or MySQL",
            "Background Jobs: Bull, Celery, Sidekiq",
        ],
        "serverless": [
            "Functions: AWS Lambda, Vercel Functions, Cloudflare Workers",
            "Database: DynamoDB, PlanetScale, Supabase",
            "Storage: S3 or R2",
        ],
        "data-pipeline": [
            "Orchestration: Apache Airflow, Prefect, Dagster",
            "Processing: Spark, dbt, custom Python",
            "Warehouse: Snowflake, BigQuery, Redshift",
            "Streaming: Kafka, Kinesis, Pub/Sub",
        ],
        "mobile-app": [
            "Cross-platform: React Native, Flutter, Ionic",
            "Backend: Firebase, Supabase, custom API",
            "Push: Firebase Cloud Messaging, OneSignal",
        ],
        "desktop-app": [
            "Framework: Electron, Tauri, Wails",
            "Storage: SQLite, IndexedDB, local files",
            "Updates: Electron-updater, Tauri built-in",
        ],
        "iot-system": [
            "Protocol: MQTT (Mosquitto, EMQX) or CoAP",
            "Gateway: AWS IoT Core, Azure IoT Hub",
            "Database: InfluxDB (time-series), PostgreSQL",
        ],
        "blockchain": [
            "Network: Ethereum, Polygon, Solana",
            "Node: Geth, managed (Infura, Alchemy)",
            "Indexing: The Graph",
        ],
        "mixed": [
            "Identify primary component and use its stack",
            "Use API Gateway to bridge different patterns",
        ],
        "unknown": [
            "Frontend: Next.js or React",
            "Backend: Node.js/Express or Python/FastAPI",
            "Database: PostgreSQL",
        ],
    },
    "enterprise": {
        "web-app": [
            "Frontend: Next.js (enterprise features), Angular",
            "Backend: Java/Spring, .NET, Node.js/NestJS",
            "Database: PostgreSQL (HA), Oracle, SQL Server",
            "WAF: AWS WAF, Cloudflare Enterprise",
            "Monitoring: Datadog, New Relic, Dynatrace",
        ],
        "ai-pipeline": [
            "Models: Self-hosted (security), Azure OpenAI",
            "Vector DB: Pinecone Enterprise, Weaviate",
            "GPU: AWS SageMaker, Azure ML",
        ],
        "microservices": [
            "Platform: Kubernetes (EKS, AKS, GKE)",
            "Service Mesh: Istio, Linkerd",
            "Observability: Datadog, Splunk, ELK",
            "GitOps: ArgoCD, Flux",
        ],
        "monolithic": [
            "Framework: Spring Boot, .NET Core, Django",
            "Database: PostgreSQL (patroni), Oracle RAC",
            "DR: Multi-region, automated backups",
        ],
        "serverless": [
            "Platform: AWS Lambda, Azure Functions",
            "Database: DynamoDB (global tables), Aurora Serverless",
            "Monitoring: X-Ray, CloudWatch",
        ],
        "data-pipeline": [
            "Processing: Spark (EMR), Databricks",
            "Warehouse: Snowflake Enterprise, BigQuery",
            "Lineage: Apache Atlas, DataHub",
        ],
        "mobile-app": [
            "MDM: MobileIron, VMware Workspace ONE",
            "Backend: Enterprise API Gateway",
            "Analytics: Segment, Amplitude",
        ],
        "desktop-app": [
            "Framework: Electron (signed), WPF, Cocoa",
            "SSO: SAML, OIDC integration",
            "Updates: Enterprise auto-updater",
        ],
        "iot-system": [
            "Platform: AWS IoT Core, Azure IoT Hub",
            "Edge: AWS Greengrass, Azure IoT Edge",
            "Database: InfluxDB Enterprise, TimescaleDB",
        ],
        "blockchain": [
            "Platform: Hyperledger Fabric, R3 Corda",
            "Security: HSM, multi-sig wallets",
            "Compliance: Transaction monitoring",
        ],
        "mixed": [
            "API Gateway: Kong Enterprise, Apigee",
            "Integration: MuleSoft, Boomi",
            "Security: OAuth2, OIDC, mutual TLS",
        ],
        "unknown": [
            "Platform: Kubernetes (EKS/AKS/GKE)",
            "Database: PostgreSQL Enterprise, Oracle",
            "Monitoring: Datadog, New Relic",
        ],
    },
}
