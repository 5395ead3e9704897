from prometheus_client import Counter, Histogram

# Prometheus metrics
REQUEST_COUNT = Counter('catalog_service_requests_total', 'Total requests', ['method', 'endpoint', 'status'])
REQUEST_DURATION = Histogram('catalog_service_request_duration_seconds', 'Request duration')
ENTITY_COUNT = Counter('catalog_service_entities_total', 'Entity write operations', ['entity', 'operation'])
