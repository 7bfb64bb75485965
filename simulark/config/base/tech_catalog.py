"""Static technology catalog used to normalize model-emitted tech names.

Each item: id, label, icon (Iconify reference), category, default_type
(the node type a component built on this tech usually gets).
"""

TECH_ECOSYSTEM = [
    # Frontend
    {"id": "react", "label": "React", "icon": "logos:react", "category": "frontend", "default_type": "frontend"},
    {"id": "vue", "label": "Vue.js", "icon": "logos:vue", "category": "frontend", "default_type": "frontend"},
    {"id": "angular", "label": "Angular", "icon": "logos:angular-icon", "category": "frontend", "default_type": "frontend"},
    {"id": "svelte", "label": "Svelte", "icon": "logos:svelte-icon", "category": "frontend", "default_type": "frontend"},
    {"id": "nextjs", "label": "Next.js", "icon": "logos:nextjs-icon", "category": "frontend", "default_type": "frontend"},
    {"id": "remix", "label": "Remix", "icon": "logos:remix-icon", "category": "frontend", "default_type": "frontend"},
    {"id": "vite", "label": "Vite", "icon": "logos:vitejs", "category": "frontend", "default_type": "frontend"},
    {"id": "astro", "label": "Astro", "icon": "logos:astro", "category": "frontend", "default_type": "frontend"},
    {"id": "flutter", "label": "Flutter", "icon": "logos:flutter", "category": "frontend", "default_type": "client"},
    {"id": "react-native", "label": "React Native", "icon": "logos:react", "category": "frontend", "default_type": "client"},
    # Backend
    {"id": "nodejs", "label": "Node.js", "icon": "logos:nodejs-icon", "category": "backend", "default_type": "backend"},
    {"id": "python", "label": "Python", "icon": "logos:python", "category": "backend", "default_type": "backend"},
    {"id": "go", "label": "Go", "icon": "logos:go", "category": "backend", "default_type": "backend"},
    {"id": "rust", "label": "Rust", "icon": "logos:rust", "category": "backend", "default_type": "backend"},
    {"id": "java", "label": "Java", "icon": "logos:java", "category": "backend", "default_type": "backend"},
    {"id": "bun", "label": "Bun", "icon": "logos:bun", "category": "backend", "default_type": "backend"},
    {"id": "deno", "label": "Deno", "icon": "logos:deno", "category": "backend", "default_type": "backend"},
    {"id": "express", "label": "Express", "icon": "logos:express", "category": "backend", "default_type": "backend"},
    {"id": "nestjs", "label": "NestJS", "icon": "logos:nestjs", "category": "backend", "default_type": "backend"},
    {"id": "fastapi", "label": "FastAPI", "icon": "logos:fastapi-icon", "category": "backend", "default_type": "backend"},
    {"id": "django", "label": "Django", "icon": "logos:django-icon", "category": "backend", "default_type": "backend"},
    {"id": "spring", "label": "Spring Boot", "icon": "logos:spring-icon", "category": "backend", "default_type": "backend"},
    # Database
    {"id": "postgres", "label": "PostgreSQL", "icon": "logos:postgresql", "category": "database", "default_type": "database"},
    {"id": "mysql", "label": "MySQL", "icon": "logos:mysql-icon", "category": "database", "default_type": "database"},
    {"id": "mongodb", "label": "MongoDB", "icon": "logos:mongodb-icon", "category": "database", "default_type": "database"},
    {"id": "redis", "label": "Redis", "icon": "logos:redis", "category": "database", "default_type": "database"},
    {"id": "cassandra", "label": "Cassandra", "icon": "logos:cassandra", "category": "database", "default_type": "database"},
    {"id": "elasticsearch", "label": "Elasticsearch", "icon": "logos:elasticsearch", "category": "database", "default_type": "database"},
    {"id": "dynamodb", "label": "DynamoDB", "icon": "logos:aws-dynamodb", "category": "database", "default_type": "database"},
    {"id": "supabase", "label": "Supabase", "icon": "logos:supabase-icon", "category": "database", "default_type": "database"},
    {"id": "firebase", "label": "Firebase", "icon": "logos:firebase", "category": "database", "default_type": "database"},
    {"id": "planetscale", "label": "PlanetScale", "icon": "logos:planetscale", "category": "database", "default_type": "database"},
    {"id": "neon", "label": "Neon", "icon": "logos:neon-icon", "category": "database", "default_type": "database"},
    # Cloud
    {"id": "aws", "label": "AWS", "icon": "logos:aws", "category": "cloud", "default_type": "service"},
    {"id": "gcp", "label": "Google Cloud", "icon": "logos:google-cloud", "category": "cloud", "default_type": "service"},
    {"id": "azure", "label": "Azure", "icon": "logos:microsoft-azure", "category": "cloud", "default_type": "service"},
    {"id": "vercel", "label": "Vercel", "icon": "logos:vercel-icon", "category": "cloud", "default_type": "service"},
    {"id": "netlify", "label": "Netlify", "icon": "logos:netlify-icon", "category": "cloud", "default_type": "service"},
    {"id": "heroku", "label": "Heroku", "icon": "logos:heroku-icon", "category": "cloud", "default_type": "service"},
    {"id": "digitalocean", "label": "DigitalOcean", "icon": "logos:digital-ocean", "category": "cloud", "default_type": "service"},
    {"id": "flyio", "label": "Fly.io", "icon": "logos:fly-icon", "category": "cloud", "default_type": "service"},
    {"id": "cloudflare", "label": "Cloudflare", "icon": "logos:cloudflare-icon", "category": "cloud", "default_type": "service"},
    # Functions
    {"id": "lambda", "label": "AWS Lambda", "icon": "logos:aws-lambda", "category": "compute", "default_type": "function"},
    {"id": "cloud-run", "label": "Cloud Run", "icon": "logos:google-cloud-run", "category": "compute", "default_type": "function"},
    {"id": "azure-functions", "label": "Azure Functions", "icon": "logos:azure-functions", "category": "compute", "default_type": "function"},
    {"id": "workers", "label": "Cloudflare Workers", "icon": "logos:cloudflare-workers-icon", "category": "compute", "default_type": "function"},
    # Storage
    {"id": "s3", "label": "Amazon S3", "icon": "logos:aws-s3", "category": "storage", "default_type": "storage"},
    {"id": "gcs", "label": "Google Cloud Storage", "icon": "logos:google-cloud-storage", "category": "storage", "default_type": "storage"},
    {"id": "r2", "label": "Cloudflare R2", "icon": "logos:cloudflare-r2", "category": "storage", "default_type": "storage"},
    # AI
    {"id": "openai", "label": "OpenAI", "icon": "logos:openai-icon", "category": "ai", "default_type": "ai"},
    {"id": "anthropic", "label": "Anthropic", "icon": "logos:anthropic-icon", "category": "ai", "default_type": "ai"},
    {"id": "huggingface", "label": "Hugging Face", "icon": "logos:hugging-face-icon", "category": "ai", "default_type": "ai"},
    {"id": "pinecone", "label": "Pinecone", "icon": "logos:pinecone", "category": "ai", "default_type": "ai"},
    {"id": "langchain", "label": "LangChain", "icon": "logos:langchain-icon", "category": "ai", "default_type": "ai"},
    {"id": "google-gemini", "label": "Google Gemini", "icon": "logos:google-gemini", "category": "ai", "default_type": "ai"},
    {"id": "meta-llama", "label": "Meta Llama", "icon": "logos:meta-icon", "category": "ai", "default_type": "ai"},
    {"id": "deepseek", "label": "DeepSeek", "icon": "arcticons:deepseek", "category": "ai", "default_type": "ai"},
    {"id": "mistral", "label": "Mistral AI", "icon": "logos:mistral-icon", "category": "ai", "default_type": "ai"},
    # DevOps
    {"id": "docker", "label": "Docker", "icon": "logos:docker-icon", "category": "devops", "default_type": "service"},
    {"id": "kubernetes", "label": "Kubernetes", "icon": "logos:kubernetes", "category": "devops", "default_type": "service"},
    {"id": "terraform", "label": "Terraform", "icon": "logos:terraform-icon", "category": "devops", "default_type": "service"},
    {"id": "github-actions", "label": "GitHub Actions", "icon": "logos:github-actions", "category": "devops", "default_type": "service"},
    {"id": "jenkins", "label": "Jenkins", "icon": "logos:jenkins", "category": "devops", "default_type": "service"},
    {"id": "prometheus", "label": "Prometheus", "icon": "logos:prometheus", "category": "devops", "default_type": "service"},
    {"id": "grafana", "label": "Grafana", "icon": "logos:grafana", "category": "devops", "default_type": "service"},
    {"id": "nginx", "label": "Nginx", "icon": "logos:nginx", "category": "devops", "default_type": "gateway"},
    # Queues
    {"id": "kafka", "label": "Kafka", "icon": "logos:kafka-icon", "category": "backend", "default_type": "queue"},
    {"id": "rabbitmq", "label": "RabbitMQ", "icon": "logos:rabbitmq-icon", "category": "backend", "default_type": "queue"},
    {"id": "sqs", "label": "AWS SQS", "icon": "logos:aws-sqs", "category": "backend", "default_type": "queue"},
]

# Lowercased spellings models commonly emit
TECH_ALIASES = {
    "next.js": "nextjs",
    "next": "nextjs",
    "next.js frontend": "nextjs",
    "react.js": "react",
    "vue.js": "vue",
    "vuejs": "vue",
    "svelte.js": "svelte",
    "vite.js": "vite",
    "node.js": "nodejs",
    "node": "nodejs",
    "express.js": "express",
    "nest.js": "nestjs",
    "fast api": "fastapi",
    "spring boot": "spring",
    "postgresql": "postgres",
    "mongo": "mongodb",
    "mongo db": "mongodb",
    "supabase postgresql": "supabase",
    "supabase postgres": "supabase",
    "amazon web services": "aws",
    "google cloud platform": "gcp",
    "microsoft azure": "azure",
    "cloudflare workers": "workers",
    "cloudflare r2": "r2",
    "amazon s3": "s3",
    "aws s3": "s3",
    "aws lambda": "lambda",
    "google cloud run": "cloud-run",
    "cloud functions": "cloud-run",
    "open ai": "openai",
    "gpt": "openai",
    "claude": "anthropic",
    "hugging face": "huggingface",
    "google gemini": "google-gemini",
    "gemini": "google-gemini",
    "llama": "meta-llama",
    "k8s": "kubernetes",
    "github ci": "github-actions",
    "ci/cd": "github-actions",
    "rabbit mq": "rabbitmq",
    "amazon sqs": "sqs",
    "aws sqs": "sqs",
}
