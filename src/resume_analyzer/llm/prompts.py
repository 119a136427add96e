from __future__ import annotations

SYSTEM_PROMPT = "You are an expert resume analyzer. You answer with a single JSON object and nothing else."

RESUME_ANALYSIS_PROMPT = """
Extract and analyze the following resume.

Resume text:
{resume_text}

Extract:
1. Personal information: full name, email, phone number, LinkedIn profile, portfolio or website.
2. Professional summary or objective.
3. Work experience, for each position: job title, company, start date, end date
   (or "Present"), key responsibilities and achievements as bullet strings.
4. Education: degree, institution, graduation year, relevant coursework or achievements.
5. Skills: technical (languages, tools, frameworks) and soft (communication, leadership).
6. Projects: name, description, technologies used, the candidate's role.
7. Certifications: name, issuing organization, date obtained.

Then analyze the resume:
1. Rate it on a scale of 1-10 for content, structure and relevance to tech industry standards.
2. List the top 3 strengths.
3. List 3-5 areas for improvement with specific, actionable suggestions.
4. Identify skill gaps against current industry trends.
5. Give 3-5 personalized recommendations for upskilling or certification.

Return strict JSON with exactly this structure:
{{
  "personalInfo": {{"name": "", "email": "", "phone": "", "linkedin": "", "portfolio": ""}},
  "summary": "",
  "workExperience": [
    {{"jobTitle": "", "company": "", "startDate": "", "endDate": "", "responsibilities": []}}
  ],
  "education": [
    {{"degree": "", "institution": "", "graduationYear": "", "achievements": []}}
  ],
  "skills": {{"technical": [], "soft": []}},
  "projects": [
    {{"name": "", "description": "", "technologies": [], "role": ""}}
  ],
  "certifications": [
    {{"name": "", "issuer": "", "dateObtained": ""}}
  ],
  "analysis": {{
    "rating": 0,
    "strengths": [],
    "improvementAreas": [],
    "skillGaps": [],
    "recommendations": []
  }}
}}

Guidelines:
- Be accurate and objective. Never invent facts that are not in the resume.
- Use an empty string or empty list for anything the resume does not contain.
- Keep feedback specific, actionable, constructive and professional.
- Return ONLY the JSON object. No markdown, no code fences, no commentary.
""".strip()


def build_analysis_prompt(resume_text: str, max_chars: int) -> str:
    return RESUME_ANALYSIS_PROMPT.format(resume_text=resume_text[:max_chars])
