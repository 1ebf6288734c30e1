"""Prompt templates for LLMO analysis."""

MAX_PROMPT_HEADINGS = 10
MAX_PROMPT_CONTENT_CHARS = 3000

ANALYSIS_PROMPT = """You are an expert in LLMO (Large Language Model Optimization).
Analyze the web page content below and evaluate how likely it is to be retrieved and cited by an AI search system (RAG) when a user asks the target question.

## Target Question
{query}

## Page Title
{title}

## Page Description
{description}

## Heading Structure
{headings}

## Main Content (excerpt)
{content}

## Structured Data (JSON-LD)
{structured_data}

## Vector Similarity Score
{similarity_percentage}%

Respond with the following JSON only, no other text. Write all feedback in {language}.
{{
  "overallScore": <0-100 overall score>,
  "comprehensiveness": {{
    "score": <0-100 information coverage score>,
    "feedback": "<2-3 sentences on how completely the page covers the question>"
  }},
  "structuredData": {{
    "score": <0-100 structure score>,
    "feedback": "<2-3 sentences on structured data and heading structure>"
  }},
  "primarySource": {{
    "score": <0-100 primary source score>,
    "feedback": "<2-3 sentences on first-hand information and originality>"
  }},
  "improvements": [
    "<specific improvement 1>",
    "<specific improvement 2>",
    "<specific improvement 3>"
  ],
  "summary": "<overall assessment in 3-4 sentences>"
}}
"""
