from rag_service.api.main import run

run()
