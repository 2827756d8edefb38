"""
Answer Review Prompt Templates

Contains the prompt for scoring one candidate solution.

Review dimensions (each 0-100):
- Correctness
- Efficiency
- Readability
- Overall score
"""


class ReviewPrompts:
    """
    Prompt templates for reviewing coding answers.

    Key principles:
    - One question per prompt so reviews run independently
    - Fixed-shape JSON object, no surrounding prose
    """

    SYSTEM_CONTEXT = """You are an expert coding interviewer and instructor. Please review this coding solution and provide detailed, constructive feedback."""

    SCORING_RUBRIC = """Provide a comprehensive review of this code in JSON format, including:

1. Correctness: Evaluate if the solution correctly solves the problem (score 0-100)
2. Efficiency: Analyze time and space complexity, identify inefficient patterns (score 0-100)
3. Readability: Assess code style, naming, structure, and documentation (score 0-100)
4. Overall score: A weighted average of the above (score 0-100)
5. Detailed feedback: Specific observations about the solution
6. Improvements: Concrete suggestions for how to improve the code"""

    OUTPUT_FORMAT = """Format your response as valid JSON with this structure:
{
  "correctness": 85,
  "efficiency": 70,
  "readability": 80,
  "overallScore": 78,
  "feedback": "Detailed feedback text here...",
  "improvements": [
    "Specific improvement suggestion 1",
    "Specific improvement suggestion 2",
    "Specific improvement suggestion 3"
  ]
}

Only provide the JSON with no additional text or explanation."""

    def generate_review_prompt(
        self,
        question: str,
        answer: str,
        language: str,
        expected_output: str | None = None,
    ) -> str:
        """Generate prompt for reviewing a single answer."""
        criteria = f"EXPECTED OUTPUT/CRITERIA:\n{expected_output}\n\n" if expected_output else ""

        return f"""{self.SYSTEM_CONTEXT}

QUESTION:
{question}

{criteria}CANDIDATE'S SOLUTION ({language}):
```{language}
{answer}
```

{self.SCORING_RUBRIC}

{self.OUTPUT_FORMAT}"""
