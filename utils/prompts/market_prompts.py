# ===== utils/prompts/market_prompts.py - market-viability prompt =====
from __future__ import annotations
from typing import List, Optional, Sequence, Union

# =========================
# 0) Role
# =========================
BASE_CONSULTANT_PROMPT = """
[ROLE]
You are an expert e-commerce consultant with deep knowledge of digital marketing.
You assess whether a product can be launched profitably in one specific country.
"""

# ==========================================
# 1) Expected top-level keys of the report
# ==========================================
REPORT_SECTIONS = (
    "aiSummaryVerdict",
    "influencerSaturation",
    "costEstimates",
    "productTrendInsights",
    "searchDemand",
    "marketSaturation",
    "audienceProfile",
    "pricePositioning",
    "platformStrategies",
    "researchKeywordsGuide",
    "actionPlan",
    "finalVerdict",
)

# Plain string (not formatted) so the braces survive untouched.
REPORT_JSON_SCHEMA = """
{
  "aiSummaryVerdict": "Short 1-line summary of viability (max 25 words)",
  "influencerSaturation": {
    "platformBreakdown": {
      "TikTok": { "relatedProductContentExistence": ["low, medium or high"] },
      "Instagram": { "relatedProductContentExistence": ["low, medium or high"] }
    }
  },
  "costEstimates": {
    "meta": { "CPM": "cost in local currency", "CPC": "cost in local currency" },
    "tiktok": { "CPM": "cost in local currency", "CPC": "cost in local currency" },
    "CACProjection": [
      { "conversionRate": "1%", "estimatedCAC": "35.00 local currency" },
      { "conversionRate": "2%", "estimatedCAC": "17.50 local currency" },
      { "conversionRate": "5%", "estimatedCAC": "7.00 local currency" }
    ]
  },
  "productTrendInsights": {
    "googleTrendScore": 0-100,
    "regionalDemand": ["City1", "City2"],
    "risingSearches": ["related trending queries"],
    "seasonality": "High/Medium/Low/None",
    "idealLaunchWindow": "E.g., Back-to-school, Q4 sales"
  },
  "searchDemand": {
    "topKeywords": [
      {
        "keyword": "string",
        "searchVolume": "estimated monthly volume",
        "lastMonthSearches": "actual searches",
        "difficulty": "Low/Medium/High"
      }
    ]
  },
  "marketSaturation": {
    "ugcPresence": "High/Medium/Low",
    "adPresence": "High/Medium/Low",
    "saturationScore": 0-100,
    "verdict": "Low/Moderate/High"
  },
  "audienceProfile": {
    "personaName": "E.g., Yassine, 25, student",
    "interests": ["room decor", "TikTok trends"],
    "platforms": ["Instagram", "TikTok"],
    "painPoints": ["dull room", "no ambiance at night"]
  },
  "pricePositioning": {
    "suggestedPrice": "27.900 local currency",
    "marketAverage": "30.000 local currency",
    "psychologicalAdvice": "Keep under 28 local currency for impulse buys",
    "estimatedCOGS": "cost of goods sold",
    "profitMargin": "High/Medium/Low"
  },
  "platformStrategies": {
    "bestChannelsToLaunch": ["TikTok", "Instagram"],
    "contentIdeas": ["before-after videos", "aesthetic room setup"],
    "influencerStrategy": "Partner with local micro influencers in the niche",
    "UGCStrategy": "Use testimonials or TikTok trends to go viral"
  },
  "researchKeywordsGuide": {
    "instagram": { "hashtags": [], "searchTerms": [], "locationTags": [] },
    "tiktok": { "hashtags": [], "searchTerms": [], "effects": [] },
    "facebook": { "marketplaceTerms": [], "groups": [] },
    "google": { "searchTerms": [], "tools": ["Google Trends", "Keyword Planner"] }
  },
  "actionPlan": {
    "timeToMarket": "7 days",
    "immediateSteps": ["Contact 3 influencers", "Run test ads on TikTok"],
    "budgetSuggestion": {
      "totalLaunchBudget": "500 local currency",
      "allocation": { "paidAds": "50%", "contentCreation": "30%", "influencerMarketing": "20%" }
    },
    "kpis": [
      { "metric": "CTR", "target": "3%", "timeframe": "first week" },
      { "metric": "Conversion rate", "target": "5%", "timeframe": "first 2 weeks" }
    ]
  },
  "finalVerdict": {
    "launchDecision": "LAUNCH NOW/LAUNCH WITH CHANGES/POSTPONE/AVOID",
    "confidenceLevel": "High/Medium/Low",
    "riskLevel": "Low/Medium/High",
    "summaryReason": "Why this verdict was chosen in 1-2 lines"
  }
}
"""

# =========================
# 2) Content rules
# =========================
def _market_rules(country: str) -> str:
    return f"""
[ANALYSIS RULES]
- Focus EXCLUSIVELY on the {country} market; ignore every other country.
- Assess market opportunity, demand, profitability and market fit; end with an actionable launch strategy.
- Give estimated monthly search volume and last month's actual searches for each keyword.
- Give platform-specific competitor research terms and hashtags for Instagram, TikTok, Facebook, Twitter/X and Google,
  including local-language variations and location tags.
- Estimate CPM and CPC for {country} on Facebook and TikTok as local-currency ranges (e.g. "2-4 TND per 1000 impressions").
- Estimate CAC at 1%, 2% and 5% conversion rates, one entry per rate: {{"conversionRate": "1%", "estimatedCAC": "27.50 local currency"}}.
- For influencer saturation report how much related creator content exists per platform and give a verdict:
  "Heavily used by influencers", "Moderately used" or "Underrated".

[DATA INTEGRITY]
- Only mention real, verifiable brands, creators or sellers currently offering the EXACT SAME product in {country}.
- DO NOT guess brand names, usernames or links and DO NOT write placeholder text.
- If nothing can be confirmed, leave the corresponding list empty.

[AD LIBRARY KEYWORDS]
- Provide 5-10 varied Meta Ad Library keywords (problem words, slang, synonyms).
- Write them in the languages spoken in {country} and never include the country name in a keyword.
"""


def _format_keywords(keywords: Union[str, Sequence[str], None]) -> str:
    if keywords is None:
        return ""
    if isinstance(keywords, str):
        return keywords
    return ", ".join(str(k) for k in keywords)


# =========================
# 3) Final prompt
# =========================
def build_market_prompt(product_title: str,
                        target_country: str,
                        keywords: Union[str, List[str], None],
                        image_url: Optional[str] = None) -> str:
    """Pure string formatting: inputs are embedded as-is, nothing is validated."""
    return f"""
{BASE_CONSULTANT_PROMPT}
[PRODUCT]
- Title: {product_title}
- Target market: {target_country} (FOCUS ONLY ON THIS COUNTRY)
- Keywords: {_format_keywords(keywords)}
- Product example image url: {image_url or "not provided"}

[TASK]
Analyze the viability of launching "{product_title}" specifically in {target_country}.
{_market_rules(target_country)}
[OUTPUT]
Return ONLY valid JSON with exactly this structure and no additional text:
{REPORT_JSON_SCHEMA}
"""
