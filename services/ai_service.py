import httpx
import json
import logging
from typing import List, Optional

from pydantic import ValidationError

from core.config import settings
from core.exceptions import AIServiceError
from schemas.ai_schema import SuggestedWeatherPoint
from schemas.trip_schema import Waypoint

logger = logging.getLogger(__name__)

TOGETHER_CHAT_URL = "https://api.together.xyz/v1/chat/completions"
DEFAULT_TRIP_DESCRIPTION = "A bicycle trip."

WEATHER_POINTS_PROMPT = """You are a trip planning assistant that helps cyclists plan bicycle trips that are one week or longer.

Given a GPX file representing a bicycle route, identify the most relevant points along the route to display weather information.
These points should include:
- Campsites or planned stopping points
- Areas with significant elevation changes
- Points that represent major changes in direction or location
- Points that are at regular intervals to provide a comprehensive overview

Consider the provided trip description when selecting points. Prioritize points that align with the user's planned activities and locations.

GPX Data:
{gpx_data}

Trip Description:
{trip_description}

Return an array of GPS coordinates representing the most relevant points along the route to display weather information.
Your response MUST be a single JSON array and nothing else. Each element must be an object with the keys
"latitude" (number), "longitude" (number) and "reason" (string explaining why the point was selected).
"""


async def generate_text_with_together_ai(
    prompt: str,
    model: Optional[str] = None,
    max_tokens: int = 2048,
    api_key: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """
    Generic function to generate text using the Together AI API.
    """
    api_key = api_key or settings.TOGETHER_API_KEY
    if not api_key:
        raise AIServiceError("Together AI API key is not configured.")
    model = model or settings.TOGETHER_MODEL

    headers = {
        'Authorization': f'Bearer {api_key}',
        'Content-Type': 'application/json'
    }

    body = {
        "model": model,
        "messages": [{"role": "user", "content": prompt}],
        "max_tokens": max_tokens,
        "temperature": 0.2
    }

    async with httpx.AsyncClient(transport=transport, timeout=60.0) as client:
        try:
            logger.info("Sending request to Together AI with model: %s", model)
            response = await client.post(TOGETHER_CHAT_URL, json=body, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning("HTTP error from Together AI: %s %s", e.response.status_code, e.response.text[:500])
            raise AIServiceError(f"Error from Together AI: {e.response.status_code}") from e
        except httpx.RequestError as e:
            logger.warning("Request error to Together AI: %s", e)
            raise AIServiceError(f"Failed to connect to Together AI: {e}") from e

    try:
        data = response.json()
    except json.JSONDecodeError as e:
        logger.warning("Together AI returned invalid JSON: %s", response.text[:500])
        raise AIServiceError(f"Together AI returned invalid JSON response: {e}") from e

    if not data.get('choices') or not data['choices'][0].get('message'):
        logger.warning("Unexpected response structure from Together AI: %s", data)
        raise AIServiceError("Together AI returned an unexpected response structure")

    return data['choices'][0]['message']['content']


def parse_weather_points(generated_content: str) -> List[SuggestedWeatherPoint]:
    """Finds the JSON array in the model's answer and validates every point."""
    start, end = generated_content.find('['), generated_content.rfind(']')
    if start == -1 or end < start:
        raise AIServiceError("The AI response did not contain a JSON array of points.")

    try:
        raw_points = json.loads(generated_content[start:end + 1])
        return [SuggestedWeatherPoint(**point) for point in raw_points]
    except (json.JSONDecodeError, TypeError, ValidationError) as e:
        raise AIServiceError(f"Failed to decode AI response into weather points: {e}") from e


def to_waypoint(point: SuggestedWeatherPoint) -> Waypoint:
    return Waypoint(
        latitude=point.latitude,
        longitude=point.longitude,
        reason=point.reason,
        name=f"AI Point: {point.reason[:20]}...",
    )


async def suggest_weather_waypoints(
    gpx_data: Optional[str],
    trip_description: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> List[Waypoint]:
    """
    Asks the AI for the points along a route where the weather is worth checking.
    """
    if not gpx_data:
        raise ValueError("GPX data is required to extract weather points.")

    prompt = WEATHER_POINTS_PROMPT.format(
        gpx_data=gpx_data,
        trip_description=trip_description or DEFAULT_TRIP_DESCRIPTION,
    )
    generated_content = await generate_text_with_together_ai(prompt, transport=transport)
    waypoints = [to_waypoint(point) for point in parse_weather_points(generated_content)]
    logger.info("AI suggested %d weather points", len(waypoints))
    return waypoints
