"""Fixed adjudication prompts and the JSON shape each one demands."""

from dataclasses import dataclass

from pydantic import BaseModel

from debate_adjudication.domain.models import (
    ChainOfThoughtStage,
    DetailedFeedbackStage,
    ScorecardStage,
    Stage,
)


@dataclass(frozen=True)
class PromptSpec:
    stage: Stage
    prompt: str
    result_model: type[BaseModel]


SCORECARD_PROMPT = """You are an adjudicator for a formal parliamentary debate (Asian/BP/World Schools format).
Given the full transcript of the debate, generate ONLY this partial adjudication JSON structure:
{
  "overallWinner": string,
  "teamRankings": [ { "rank": number, "team": string, "score": number } ],
  "scorecard": {
    [teamName: string]: {
      "matter": number,
      "manner": number,
      "method": number,
      "color": string
    }
  }
}

SCORING GUIDELINES:
- All scores (matter, manner, method, team rankings) must be out of 100 (0-100 range)
- Matter: Content, arguments, logic, evidence (0-100)
- Manner: Delivery, presentation, persuasiveness (0-100)
- Method: Structure, time management, teamwork (0-100)
- Team ranking scores should be the sum of individual speaker scores

Only return valid JSON. Do NOT include any commentary or markdown (like ```). Invalid JSON will break the application."""

CHAIN_OF_THOUGHT_PROMPT = """Now generate the chain of thought analysis in the following format. Every clash must name a clear winner:
{
  "chainOfThought": {
    "title": string,
    "clashes": [
      {
        "id": string,
        "title": string,
        "weight": number,
        "winner": string,
        "summary": string
      }
    ]
  }
}

CRITICAL WEIGHT REQUIREMENTS:
- Weight MUST be a number between 1 and 99 (inclusive)
- NO values above 99 are allowed
- NO percentages - just the raw number (e.g., use 85, NOT 85% or 8500)
- Weight represents relative importance:
  * 90-99: Absolutely crucial clash that determines the debate
  * 70-89: Very important clash with significant impact
  * 50-69: Important clash that affects the outcome
  * 30-49: Moderate clash with some relevance
  * 10-29: Minor clash with limited impact
  * 1-9: Minimal clash with very little significance

EXAMPLES OF CORRECT WEIGHTS: 85, 72, 45, 23, 8
EXAMPLES OF INCORRECT WEIGHTS: 8500, 90%, 150, 9000

Only return valid JSON. Do NOT include any commentary or markdown (like ```)."""

DETAILED_FEEDBACK_PROMPT = """Now generate detailed feedback in the following structure:
{
  "detailedFeedback": {
    "replySpeeches": {
      "proposition": { "speaker": string, "score": number, "summary": string },
      "opposition": { "speaker": string, "score": number, "summary": string }
    },
    "speakers": [
      {
        "name": string,
        "team": string,
        "scores": {
          "matter": number,
          "manner": number,
          "method": number,
          "total": number
        },
        "roleFulfillment": string,
        "rhetoricalAnalysis": string,
        "timestampedComments": [ { "time": string, "comment": string } ]
      }
    ]
  }
}

SCORING GUIDELINES:
- All individual scores (matter, manner, method) must be out of 100 (0-100 range)
- Reply speech scores must be out of 100 (0-100 range)
- Total score should be the sum of matter + manner + method (0-300 range)
- Be consistent with the scores from the previous prompts

Only return valid JSON. No markdown, explanation, or commentary."""


SCORECARD = PromptSpec(Stage.SCORECARD, SCORECARD_PROMPT, ScorecardStage)
CHAIN_OF_THOUGHT = PromptSpec(
    Stage.CHAIN_OF_THOUGHT, CHAIN_OF_THOUGHT_PROMPT, ChainOfThoughtStage
)
DETAILED_FEEDBACK = PromptSpec(
    Stage.DETAILED_FEEDBACK, DETAILED_FEEDBACK_PROMPT, DetailedFeedbackStage
)

# Later prompts refer back to the scores produced by earlier ones.
STAGE_ORDER: tuple[PromptSpec, ...] = (SCORECARD, CHAIN_OF_THOUGHT, DETAILED_FEEDBACK)
