"""
Question Generation Prompt Templates

Builds the prompt that asks the upstream service for a resume-tailored set of
coding questions. Questions must be language-agnostic: the candidate picks
the implementation language when answering.
"""


class GenerationPrompts:
    """
    Prompt templates for coding question generation.

    Key principles:
    - Exactly five questions spanning easy, medium and hard
    - No language-, framework- or library-specific phrasing
    - Strict JSON output with a fixed set of properties
    """

    SYSTEM_CONTEXT = """You are an expert technical interviewer. I need you to analyze this resume and create 5 coding questions tailored to the candidate's experience and skills. The questions should help assess their coding abilities for potential employment."""

    REQUIREMENTS = """Generate 5 coding questions that:
1. Match the technologies and skills mentioned in the resume
2. Include a mix of difficulty levels (easy, medium, hard)
3. Cover different areas relevant to the candidate's background
4. Are generic algorithm or problem-solving questions that can be answered in ANY programming language
5. Include expected output or acceptance criteria where appropriate

IMPORTANT GUIDELINES:
- Do NOT specify a programming language in the question (like "Implement in Python" or "Create a React component")
- Questions should be language-agnostic - the user will choose which language to use
- Focus on general programming concepts, algorithms, data structures, and problem-solving
- Avoid framework-specific questions (like FastAPI, React, Angular, etc.)
- Do not mention specific libraries or technologies in the questions themselves
- Make questions concise and clear with specific inputs/outputs"""

    OUTPUT_FORMAT = """Format your response as valid JSON following EXACTLY this structure:
{
  "title": "Coding Assessment based on Resume Analysis",
  "description": "This assessment is tailored to your experience in [main technologies from resume]",
  "questions": [
    {
      "id": "q1",
      "question": "Detailed question text...",
      "difficulty": "easy|medium|hard",
      "category": "category name",
      "expectedOutput": "Expected output or acceptance criteria"
    }
  ]
}

CRITICAL: Each question must have these exact properties: "id", "question", "difficulty", "category", and "expectedOutput".
DO NOT include additional properties. DO NOT use colons inside property keys.
Ensure the generated JSON is valid and properly formatted. All strings must be in double quotes.

Make questions practical, not theoretical, and specific enough that the candidate can write actual code to solve them in any language of their choice."""

    def generate_questions_prompt(self, resume_text: str | None) -> str:
        """Generate prompt for creating a question set from resume text."""
        resume = resume_text.strip() if resume_text else "No resume text available."

        return f"""{self.SYSTEM_CONTEXT}

RESUME TEXT:
{resume}

{self.REQUIREMENTS}

{self.OUTPUT_FORMAT}"""
