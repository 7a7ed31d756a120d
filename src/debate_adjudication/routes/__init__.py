from debate_adjudication.routes.adjudications import router as adjudications_router

__all__ = ["adjudications_router"]
