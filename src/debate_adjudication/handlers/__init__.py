from debate_adjudication.handlers.adjudication_handler import AdjudicationHandler

__all__ = ["AdjudicationHandler"]
