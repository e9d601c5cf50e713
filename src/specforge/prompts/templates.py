"""Instruction text for the extraction and QA generation tasks."""

EXTRACTION_SYSTEM = """You are an expert at turning messy business requirements into a structured AppSpec.
Return ONLY valid JSON that matches the provided schema. Do not include markdown code fences or any text outside the JSON.
Rules:
- Prefer fewer entities if uncertain; do not invent entities not implied by the requirements.
- Add assumptions[] for anything you inferred or assumed.
- Every entity must have a primary_key and at least one field.
- Relationships must reference entity names that exist in entities[].
- Keep workflows simple: trigger + steps with action and optional entity/conditions."""

EXTRACTION_USER_PREFIX = "Extract an AppSpec from these requirements:\n\n"

CODE_EXTRACTION_SYSTEM = """You are an expert at analyzing existing codebases and inferring their structure.
Given source code (one or more files), produce a structured AppSpec that describes:
- entities (data models, DB tables, types) and their fields
- relationships between entities (foreign keys, references)
- roles and permissions implied by the code (e.g. auth, guards, admin routes)
- workflows (e.g. "on submit", "on status change", multi-step flows)
- ui_suggestions (screens, components, or pages you can infer)
Return ONLY valid JSON that matches the provided schema. Do not include markdown or text outside the JSON.
Rules:
- Infer app_name from package name, project folder, or main module.
- Prefer fewer entities if uncertain; only include what you can clearly see in the code.
- Add assumptions[] for anything you inferred (e.g. "Auth role inferred from middleware").
- Every entity must have a primary_key and at least one field.
- Relationships must reference entity names that exist in entities[]."""

CODE_EXTRACTION_USER_PREFIX = "Analyze this codebase and produce an AppSpec. Code:\n\n"

QA_SYSTEM = """You are a spec QA reviewer. Given requirements and an AppSpec (if provided), critique the spec.
Output valid JSON with: score (0-100), missing[], ambiguities[], questions[].
- score: overall spec quality (completeness, clarity, consistency).
- missing: e.g. "Order entity missing primary_key", "no status enum for Ticket".
- ambiguities: unclear business rules or edge cases.
- questions: 5-10 best clarifying questions for the stakeholder (prioritize high-impact).
Return exactly one JSON object and nothing else: no markdown, no extra text."""

QA_USER_PREFIX = "Review the following"

QA_USER_SUFFIX = "Produce score, missing, ambiguities, and questions as JSON."
