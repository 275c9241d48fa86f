json_only_system_prompt = (
    "You are a JSON-only API. Reply with a single valid JSON value and nothing else: "
    "no explanations, no markdown fences, no control characters."
)

weather_system_prompt = (
    "You are a weather forecasting expert. Produce realistic weather data for travellers. "
    "Always reply with valid JSON only."
)

weather_prompt = """Produce a realistic weather outlook for {destination} covering a trip from {start_date} to {end_date} ({days} days).

Coordinates: {lat}, {lng}
Month: {month}
Season: {season}

Include the current conditions and one forecast entry for EVERY one of the {days} days.

JSON shape:
{{
  "current": {{
    "temp": 28,
    "feelsLike": 30,
    "condition": "Partly Cloudy",
    "description": "Warm with scattered clouds",
    "humidity": 65,
    "windSpeed": 12,
    "icon": "02d"
  }},
  "forecast": [
    {{
      "date": "{start_date}",
      "temp": 28,
      "minTemp": 22,
      "maxTemp": 32,
      "condition": "Sunny",
      "humidity": 60,
      "description": "Clear skies"
    }}
  ]
}}

Temperatures must be plausible for {destination} in {month}. The forecast array must contain exactly {days} entries with ISO dates.
Reply with JSON only."""

hotels_prompt = """Recommend 3 hotels in {destination} for a stay from {check_in} to {check_out}.

Budget level: {budget}
Nightly price guide in INR: Low = 800-1500, Moderate = 2000-4000, High = 5000-8000.

For every hotel give a plausible local name, the nightly price, a rating out of 5, the area within {destination} and a short amenities list.

JSON array shape:
[
  {{
    "name": "Hotel Name",
    "price": "₹2,500/night",
    "rating": "4.2",
    "address": "Area or street in {destination}",
    "amenities": "WiFi, Breakfast, Parking"
  }}
]

Reply with the JSON array only."""

railways_prompt = """Suggest 3 trains running from {start_location} to {destination}.

Budget level: {budget}

JSON array shape:
[
  {{
    "trainName": "Train name",
    "trainNumber": "12345",
    "class": "AC 2-Tier",
    "price": "₹1,200",
    "duration": "12h 30m",
    "departureTime": "08:00 AM",
    "arrivalTime": "08:30 PM"
  }}
]

Reply with the JSON array only."""

transport_prompt = """Describe the journey from {start_location} to {destination} by {mode}.

Trip details:
- From: {start_location}
- To: {destination}
- Mode: {mode}
- Budget level: {budget}
- Travellers: {travelers}

JSON object shape:
{{
  "duration": "12h 30m",
  "cost": "₹1,500",
  "emissions": "15kg CO2",
  "departureTime": "08:00 AM",
  "arrivalTime": "08:30 PM",
  "route": "{start_location} → {destination}"
}}

Reply with the JSON object only."""

itinerary_prompt = """Plan a {days}-day trip to {destination}.

The plan must contain EXACTLY {days} days.

Trip details:
- Destination: {destination}
- Duration: {days} days
- Travellers: {travelers}
- Budget level: {budget}
- First day: {start_date}
- Last day: {end_date}

JSON array shape, one object per day:
[
  {{
    "day": 1,
    "date": "{start_date}",
    "activities": [
      {{ "time": "09:00 AM", "activity": "Specific morning activity", "cost": "₹300" }},
      {{ "time": "11:00 AM", "activity": "Late morning visit", "cost": "₹500" }},
      {{ "time": "02:00 PM", "activity": "Lunch at a named place", "cost": "₹400" }},
      {{ "time": "04:00 PM", "activity": "Afternoon activity", "cost": "₹200" }},
      {{ "time": "07:00 PM", "activity": "Evening plan", "cost": "₹600" }}
    ]
  }}
]

Reply with the JSON array only."""

food_system_prompt = (
    "You are a food and cuisine expert on Indian regional cooking. Recommend authentic local food. "
    "Always reply with valid JSON only."
)

food_prompt = """List 8 to 10 dishes or eateries a traveller should try in {destination}, India, on a {budget} budget.

Cover street food, local specialities, well known eateries and traditional dishes, priced for a {budget} budget.

JSON array shape:
[
  {{
    "name": "Dish or eatery",
    "description": "20-30 words on what it is",
    "type": "Street Food / Restaurant / Cafe / Sweet Shop",
    "priceRange": "₹50-100",
    "mustTry": true,
    "vegetarian": true,
    "location": "Area or landmark where it is found"
  }}
]

Be specific to {destination}. Reply with the JSON array only."""

crowd_system_prompt = (
    "You are an expert on Indian tourism, festivals and crowd patterns. "
    "Predict crowd levels from festivals, holidays and seasons. Always reply with valid JSON only."
)

crowd_prompt = """Estimate how crowded {destination}, India will be between {start_date} and {end_date}.

Take into account festivals and religious events, school and college holidays, the tourist season and weather, local celebrations and public holidays.

JSON object shape:
{{
  "level": "🔴 Very High" | "🟠 High" | "🟡 Moderate" | "🟢 Low",
  "description": "Why this level, naming festivals or events where relevant",
  "tips": "One practical tip for visitors in this period",
  "festivals": ["festival or event names"],
  "bestTimeToVisit": "Best time of day to visit popular spots"
}}

Reply with the JSON object only."""

emergency_system_prompt = (
    "You are an emergency services expert for India. Provide accurate emergency contact numbers. "
    "Always reply with valid JSON only."
)

emergency_prompt = """List the emergency contact numbers a traveller needs in {destination}, India.

JSON object shape:
{{
  "police": "police emergency number",
  "ambulance": "ambulance number",
  "fire": "fire brigade number",
  "tourist": "tourist helpline with area code",
  "helpline": "general emergency helpline",
  "localPolice": "local police station number if known",
  "hospital": "major hospital contact if known"
}}

Where a local number is unknown use the national numbers: police 100, ambulance 108, fire 101, tourist helpline 1363.
Reply with the JSON object only."""

notifications_system_prompt = (
    "You are a travel expert on Indian festivals, events and seasonal destinations. "
    "Write personalised travel suggestions for upcoming events. Always reply with valid JSON only."
)

notifications_prompt = """Suggest trips around festivals and events in India between {today} and {until}.

Today: {today}
User location: {user_location}

Consider major and regional festivals, weather-driven travel, long weekends and cultural events.

JSON array shape with 3 to 5 entries:
[
  {{
    "id": 1,
    "title": "Festival or event name",
    "message": "40-60 words on where to go and why",
    "destination": "City or place",
    "date": "YYYY-MM-DD",
    "icon": "a fitting emoji",
    "category": "festival | seasonal | cultural | adventure"
  }}
]

Reply with the JSON array only."""

voice_system_prompt = (
    "You are a travel assistant that extracts trip details from what the user says. "
    "Reply to the user in {language_name} and return valid JSON only."
)

voice_extraction_prompt = """Extract trip details from the user's spoken input.

Current stage: {stage}
Stages:
0 = Starting location -> "startLocation": "city name"
1 = Destination -> "destination": "city name"
2 = Travel dates -> "startDate": "YYYY-MM-DD", "endDate": "YYYY-MM-DD"
3 = Number of travellers -> "travelers": "Solo" | "Duo" | "Group"
4 = Budget -> "budget": "Low" | "Moderate" | "High"
5 = Transport -> "transport": "Bus" | "Train"

Today's date: {today}
User said ({language_name}): "{user_input}"
Details collected so far: {collected}

JSON object shape:
{{
  "extractedData": {{ "<field for stage {stage}>": "<value>" }},
  "response": "A short {language_name} reply confirming what you understood",
  "nextStage": {next_stage},
  "complete": {complete}
}}

Reply with the JSON object only."""

vision_prompt = """Study this image and identify the place or landmark it shows.

Use every clue: famous landmarks and monuments, architecture, natural scenery, text on signs, the language of signs, regional and cultural details, geography.

JSON object shape:
{
  "location": "Specific landmark or place name, or Unknown",
  "city": "City name or Unknown",
  "country": "Country name or Unknown",
  "confidence": "High" | "Medium" | "Low",
  "reasoning": "2-3 sentences explaining the identification",
  "landmarks": ["landmark1", "landmark2"],
  "lat": latitude number or null,
  "lng": longitude number or null,
  "category": "Historical Site" | "Natural Landmark" | "Modern Building" | "Religious Site" | "Cultural Site" | "Unknown"
}

Name landmarks precisely. Give approximate coordinates when you know the place. If unsure use "Unknown" and "Low".
Reply with the JSON object only."""

caption_location_prompt = """An image captioning model described a photo as:

"{caption}"

Work out which real-world place, landmark or monument the caption describes.

JSON object shape:
{{"name": "place or monument name", "city": "city or nearest major city", "country": "country", "landmark": "geocodable search string such as Eiffel Tower Paris France", "description": "2-3 sentences useful for a traveller", "confidence": "high" | "medium" | "low"}}

If no recognisable place is described reply with:
{{"name": "Unknown Location", "city": "", "country": "", "landmark": "", "description": "Could not identify a specific location from this image.", "confidence": "low"}}

Reply with the JSON object only."""

chat_prompt = """You are a helpful travel assistant. {context}

User question: {message}

Answer helpfully and briefly in plain English text. Do not answer in JSON."""
