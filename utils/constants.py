"""
utils/constants.py

Purpose: Centralized static content

- All user-facing messages
- Supported languages and AI roles
- Game content (8-ball answers, quotes, jokes, facts)

(Prevents hardcoding across the codebase)

Templates use str.format placeholders. {bot_name} and {company} are
filled from settings by the command layer.
"""

# ============================================================
# LANGUAGES & ROLES
# ============================================================

LANGUAGES = [
    {"code": "en", "label": "🇬🇧 English"},
    {"code": "fr", "label": "🇫🇷 French"},
    {"code": "es", "label": "🇪🇸 Spanish"},
    {"code": "de", "label": "🇩🇪 German"},
    {"code": "ar", "label": "🇸🇦 Arabic"},
    {"code": "hi", "label": "🇮🇳 Hindi"},
    {"code": "yo", "label": "🇳🇬 Yoruba"},
    {"code": "ig", "label": "🇳🇬 Igbo"},
    {"code": "zh", "label": "🇨🇳 Chinese"},
    {"code": "ru", "label": "🇷🇺 Russian"},
    {"code": "ja", "label": "🇯🇵 Japanese"},
    {"code": "pt", "label": "🇵🇹 Portuguese"},
    {"code": "it", "label": "🇮🇹 Italian"},
    {"code": "tr", "label": "🇹🇷 Turkish"},
    {"code": "sw", "label": "🇰🇪 Swahili"},
]

DEFAULT_LANGUAGE_LABEL = "🇬🇧 English"

ROLES = [
    "Mathematician", "Econometician", "Doctor", "Brain Master", "Physicist", "Chemist", "Biologist",
    "Engineer", "Philosopher", "Psychologist", "Spiritual Advisor", "AI Researcher", "Teacher", "Professor",
    "Developer", "Data Scientist", "Statistician", "Entrepreneur", "Journalist", "History Expert", "Lawyer",
    "Accountant", "Investor", "Startup Mentor", "UX Designer", "Therapist", "Nutritionist", "Fitness Coach",
    "Poet", "Author", "Script Writer", "Public Speaker", "Game Developer", "Ethical Hacker", "Security Analyst",
    "DevOps Engineer", "Cloud Expert", "Geographer", "Astronomer", "Political Analyst", "Environmental Scientist",
    "AI Lawyer", "Robotics Engineer", "Medical Researcher", "Economist", "Agronomist", "Anthropologist",
    "Cryptographer", "Quantum Physicist", "Visionary", "Linguist", "AI Trainer", "Mobile Developer",
    "Web Developer", "Data Analyst", "System Admin", "Logician", "Neuroscientist", "Ecologist", "Marine Biologist",
    "Meteorologist", "Cybersecurity Expert", "Economics Tutor", "Healthcare Consultant", "Project Manager",
    "Content Creator", "SEO Expert", "Social Media Strategist", "Pharmacologist", "Dentist", "Veterinarian",
    "Music Theorist", "AI Ethicist", "Language Tutor", "Blockchain Developer", "Geneticist", "Psychiatrist",
    "UX Researcher", "Game Designer", "Legal Advisor", "Literary Critic", "Cultural Analyst", "Civil Engineer",
    "Mechanical Engineer", "Electrical Engineer", "AI Psychologist", "Film Critic", "Forensic Scientist",
    "Statistic Tutor", "AI Architect", "AI Philosopher", "Hardware Engineer", "Nutrition Coach", "Space Scientist",
    "Theologian",
]

ROLES_PREVIEW_COUNT = 20


def language_label(code: str) -> str:
    for language in LANGUAGES:
        if language["code"] == code:
            return language["label"]
    return DEFAULT_LANGUAGE_LABEL


def find_language(query: str):
    """Matches a language code exactly or a substring of its label (case-insensitive)."""
    query = query.lower()
    for language in LANGUAGES:
        if language["code"].lower() == query or query in language["label"].lower():
            return language
    return None


def find_role(query: str):
    query = query.lower()
    for role in ROLES:
        if role.lower() == query:
            return role
    return None


# ============================================================
# AI RESPONSES
# ============================================================

AI_RESPONSE_TEMPLATE = """🤖 *{bot_name}* | *{role}*
🌐 {language} | ⏰ {time}

{content}

✨ _Powered by {company}_"""

AI_UNAVAILABLE_TEMPLATE = """🤖 *{bot_name}* | *{role}*
🌐 {language} | ⏰ {time}

⚠️ I'm currently experiencing technical difficulties with my AI processing. Please try again in a moment!

💡 In the meantime, you can:
• Use /games for entertainment
• Use /tools for text utilities
• Use /help for command list

✨ _{company} - Always here to help_"""

AI_CHAT_ERROR_MESSAGE = """🤖 *{bot_name}*

⚠️ I'm currently experiencing technical difficulties. Please try again in a moment!

💡 Use /help for available commands.

✨ _{company} - Always here to help_"""

FALLBACK_SYSTEM_PROMPT = """You are {bot_name}, an intelligent assistant developed by {company}.
You are currently operating in {role} mode. Respond in a helpful, professional manner.
Reply in {language}.
Your name is {bot_name} and you were created by {company}.
Never mention Google, Gemini, or any other AI provider names.
Always maintain the {bot_name} identity and branding.

User Query: {prompt}"""


# ============================================================
# BASIC COMMANDS
# ============================================================

WELCOME_MESSAGE = """👋 *Hello, I'm {bot_name}!*

🤖 Developed by *{company}*, your intelligent assistant is now online!

💡 Ask me anything:
🧮 Math | 💊 Health | 💻 Tech | 🎭 Creativity

🎓 Use /role to switch brain mode
🌐 Use /lang to choose language
🛠️ Use /menu for quick options
🔄 Use /reset to reset settings
🎮 Use /games for fun activities
🆘 Use /support <your message> for support
🚀 Let's go!"""

HELP_MESSAGE = """🆘 *{bot_name} Help*

• Use /start to see welcome
• /role to pick your expert mode
• /lang for language
• /about for info
• /reset for a fresh start
• /menu for quick options
• /games for fun activities
• /tools for text utilities
• /stats for bot statistics
• /support <your message> if you need help
• /ping to check bot status"""

ABOUT_MESSAGE = """ℹ️ *About {bot_name}*

🤖 Developed by *{company}*
💡 Multi-role intelligent assistant powered by AI endpoints
🌐 {language_count}+ languages supported
🧠 {role_count}+ Knowledge Roles

🎓 Use /role and /lang
🛠️ Use /menu for quick settings
🔄 Use /reset to reset settings
🆘 Use /support <your message> for support"""

SUPPORT_REQUEST_MESSAGE = """📩 *New Support Request*

👤 *From:* {name}
🆔 *User:* {phone}

💬 *Message:*
{text}"""

SUPPORT_SENT_MESSAGE = """✅ *Support Request Sent*

📨 Your message has been forwarded to our admin team!
⏰ Expect a response soon."""

SUPPORT_MODE_MESSAGE = """🆘 *{bot_name} Support Center*

💌 *Contact Options:*
• Email: {support_email}
• Quick Help: /support <your message>

⚡ *Response Time:* Our admins respond ASAP!

💡 *Tip:* Be specific about your issue for faster resolution.

📝 *Support Mode Activated:* Your next message will be sent directly to our admin team!"""

PING_MESSAGE = """🏓 *{bot_name} Status: ONLINE*

✅ All systems operational!"""

RESET_MESSAGE = """🔄 *Settings Reset Complete*

✅ Role: Default ({default_role})
✅ Language: Default ({default_language})

💡 Use /role and /lang to customize again!"""

STATS_MESSAGE = """📊 *{bot_name} Statistics*

⏰ *Bot Uptime:* {days}d {hours}h
👥 *Total Users:* {total_users}
🛡️ *Administrators:* {total_admins}
🎯 *Active Today:* {active_today}
💬 *Total Messages:* {total_messages}
⚡ *Total Commands:* {total_commands}

👤 *Your Settings:*
🧠 Role: {role}
🌐 Language: {language}

✨ _Powered by {company}_"""

MENU_MESSAGE = """⚙️ *Quick Settings Menu*

🚀 Choose an option:

🧠 */role* - Choose your expert role
🌍 */lang* - Select your language
ℹ️ */about* - About {bot_name}
🔄 */reset* - Reset your settings
🆘 */support* - Get support help
🛡️ */admin* - Admin panel (admins only)
🎮 */games* - Games & fun activities
🛠️ */tools* - Text utilities
📊 */stats* - Bot statistics
🏓 */ping* - System status
📚 */help* - Help guide"""

ROLE_UPDATED_MESSAGE = """🧠 *Role Updated Successfully*

✅ Your new expert role: *{role}*

🚀 AI responses will now be tailored to this expertise!"""

ROLE_NOT_FOUND_MESSAGE = '❌ Role "{role}" not found. Use /role to see available roles.'

ROLE_LIST_MESSAGE = """🧠 *Choose Your Expert Role*

💡 Available roles (first {shown}):

{roles}

... and {remaining} more roles.

📝 *Usage:* /role <role name>
*Example:* /role Doctor"""

LANGUAGE_UPDATED_MESSAGE = """🌍 *Language Updated Successfully*

✅ Your new language: {label}

🗣️ AI responses will now be in your selected language!"""

LANGUAGE_NOT_FOUND_MESSAGE = '❌ Language "{language}" not found. Use /lang to see available languages.'

LANGUAGE_LIST_MESSAGE = """🌍 *Choose Your Language*

🗣️ Available languages:

{languages}

📝 *Usage:* /lang <language code>
*Example:* /lang es (for Spanish)"""

UNKNOWN_COMMAND_MESSAGE = """❓ *Unknown Command*

The command `/{command}` is not recognized.

🆘 *Available Commands:*
• /help - View all commands
• /about - Learn about {bot_name}
• /menu - Quick action menu
• /games - Fun activities
• /tools - Text utilities
• /start - Welcome message

💡 *Tip:* Use /help to see the complete command list!"""

COMMAND_ERROR_MESSAGE = "❌ Error executing command /{command}. Please try again later."

STARTUP_MESSAGE = """🚀 *{bot_name} is Online!*

✅ WhatsApp connection established
🤖 Bot version: {version}
⏰ Started at: {time}

Ready to assist users! 🎉"""


# ============================================================
# ADMIN COMMANDS
# ============================================================

ACCESS_DENIED_MESSAGE = "⛔️ *Access Denied* - Admins only!"

ADMIN_PANEL_DENIED_MESSAGE = """⛔️ *Access Denied*

🛡️ This command is reserved for administrators only."""

PRIMARY_ONLY_MESSAGE = "⛔️ Only the primary admin can {action}."

ADMIN_PANEL_MESSAGE = """🛡️ *Admin Control Panel*

✨ Welcome to the administrative dashboard!

📊 *Available Commands:*
• */adminstats* - View system statistics
• */broadcast <message>* - Send message to all users
• */users* - View registered users
• */promote <number>* - Promote user to admin
• */demote <number>* - Demote admin user
• */activity* - View user activity
• */apistatus* - Check AI API status
• */commands* - Command usage statistics
• */topusers* - Most active users

{access_line}"""

ADMIN_INFO_MESSAGE = """🛡️ *Admin System Info*

👤 Your ID: {phone}
📛 Name: {name}
⚡ Admin Status: {status}
👥 Total Admins: {total_admins}
👥 Total Users: {total_users}

{footer}"""

ADMIN_INFO_HOW_TO = """📋 *How to become admin:*
Contact the primary admin ({admin_number}) to promote you using /promote {phone}"""

ADMIN_STATS_HEADER = """📊 *System Statistics*

⏰ *Bot Uptime:* {days}d {hours}h
👥 *Total Users:* {total_users}
🛡️ *Administrators:* {total_admins}
🎯 *Active Today:* {active_today}
💬 *Total Messages:* {total_messages}
⚡ *Total Commands:* {total_commands}

🏆 *Top Commands:*
"""

BROADCAST_USAGE = """📢 *Broadcast System*

💡 To send a message to all users:
/broadcast <your message>

📤 Your message will be delivered to all registered users.

*Example:* /broadcast Hello everyone! {bot_name} has been updated."""

BROADCAST_MESSAGE = """📢 *Admin Broadcast*

👤 *From:* {name}

💬 *Message:*
{text}"""

BROADCAST_REPORT = """✅ *Broadcast Complete*

📤 Successfully sent to: {success} users
❌ Failed to send to: {failed} users
🎯 Total attempted: {total} users"""

PROMOTE_USAGE = """Usage: /promote <phone_number>
Example: /promote 2349012345678"""

DEMOTE_USAGE = """Usage: /demote <phone_number>
Example: /demote 2349012345678"""

PROMOTED_NOTICE = "🎉 Congratulations! You have been promoted to admin by the primary admin."

DEMOTED_NOTICE = "📉 You have been demoted from admin by the primary admin."

API_STATUS_FOOTER = """
📊 *API Flow:*
1. Try all {primary_count} primary APIs sequentially
2. If all fail, use the fallback provider
3. If still no response, show enhanced error message

🛡️ *Brand Protection:*
• All responses maintain {bot_name} identity
• Text normalization keeps branding consistent
• No external provider names leak through

✨ _{company} API Management_"""

USER_NOT_FOUND_MESSAGE = "❌ User not found in database."

ACTIVITY_REPORT = """👤 *User Activity Report*

📛 *Name:* {name}
🆔 *Phone:* {phone}
🛡️ *Admin:* {admin}

📊 *Activity Stats:*
💬 Messages: {messages}
⚡ Commands: {commands}
🎯 Total: {total}

📅 *Dates:*
🆕 First Seen: {first_seen}
👁️ Last Seen: {last_seen}

📝 *Notes:* {notes}"""


# ============================================================
# TOOLS
# ============================================================

TOOLS_MESSAGE = """🛠️ *Text Utilities Toolkit*

📝 *Available Tools:*
• /count <text> - Count words and characters
• /reverse <text> - Reverse text
• /upper <text> - Convert to UPPERCASE
• /lower <text> - Convert to lowercase
• /title <text> - Convert To Title Case
• /encode <text> - Base64 encode text
• /decode <text> - Base64 decode text

💡 *Example:* /count Hello World"""

TOOL_USAGE = {
    "count": "Usage: /count <text>\nExample: /count Hello World",
    "reverse": "Usage: /reverse <text>\nExample: /reverse Hello World",
    "upper": "Usage: /upper <text>\nExample: /upper hello world",
    "lower": "Usage: /lower <text>\nExample: /lower HELLO WORLD",
    "title": "Usage: /title <text>\nExample: /title hello world",
    "encode": "Usage: /encode <text>\nExample: /encode Hello World",
    "decode": "Usage: /decode <base64_text>\nExample: /decode SGVsbG8gV29ybGQ=",
}

COUNT_MESSAGE = """📊 *Text Analysis Results*

📝 *Text:* "{text}"

🔢 *Statistics:*
• Words: {words}
• Characters: {chars}
• Characters (no spaces): {chars_no_spaces}

✨ _Analysis by {company}_"""

CONVERSION_MESSAGE = """{icon} *{title}*

📝 *Original:* "{text}"
{icon} *{label}:* "{result}"

✨ _Powered by {company}_"""

ENCODE_MESSAGE = """🔐 *Base64 Encoding*

📝 *Original:* "{text}"
🔐 *Encoded:* `{result}`

✨ _Powered by {company}_"""

DECODE_MESSAGE = """🔓 *Base64 Decoding*

🔐 *Encoded:* `{text}`
🔓 *Decoded:* "{result}"

✨ _Powered by {company}_"""

DECODE_FAILED_MESSAGE = "❌ Decoding failed. Please provide valid Base64 text."


# ============================================================
# GAMES
# ============================================================

GAMES_MESSAGE = """🎮 *Games & Fun Zone*

🎲 /dice - Roll a die
🪙 /coin - Flip a coin
🔢 /number - Random number (1-100)
🎱 /8ball <question> - Ask the magic 8-ball
💬 /quote - Inspirational quote
😂 /joke - Random joke
🧠 /fact - Fun fact

✨ _Have fun with {bot_name}!_"""

EIGHT_BALL_USAGE = """Usage: /8ball <your question>
Example: /8ball Will it rain tomorrow?"""

EIGHT_BALL_ANSWERS = [
    "It is certain.", "It is decidedly so.", "Without a doubt.", "Yes, definitely.",
    "You may rely on it.", "As I see it, yes.", "Most likely.", "Outlook good.",
    "Yes.", "Signs point to yes.", "Reply hazy, try again.", "Ask again later.",
    "Better not tell you now.", "Cannot predict now.", "Concentrate and ask again.",
    "Don't count on it.", "My reply is no.", "My sources say no.",
    "Outlook not so good.", "Very doubtful.",
]

QUOTES = [
    "The only way to do great work is to love what you do. - Steve Jobs",
    "Innovation distinguishes between a leader and a follower. - Steve Jobs",
    "The future belongs to those who believe in the beauty of their dreams. - Eleanor Roosevelt",
    "It always seems impossible until it's done. - Nelson Mandela",
    "Success is not final, failure is not fatal: it is the courage to continue that counts. - Winston Churchill",
    "Believe you can and you're halfway there. - Theodore Roosevelt",
    "Knowledge is power. - Francis Bacon",
]

JOKES = [
    "Why do programmers prefer dark mode? Because light attracts bugs! 🐛",
    "Why did the computer go to the doctor? It had a virus! 🦠",
    "How many programmers does it take to change a light bulb? None, that's a hardware problem! 💡",
    "Why was the math book sad? It had too many problems! 📚",
    "What do you call a fake noodle? An impasta! 🍝",
    "Why don't scientists trust atoms? Because they make up everything! ⚛️",
]

FACTS = [
    "Honey never spoils. Archaeologists have found edible honey in ancient Egyptian tombs! 🍯",
    "Octopuses have three hearts and blue blood! 🐙",
    "A day on Venus is longer than a year on Venus! 🪐",
    "Bananas are berries, but strawberries aren't! 🍌",
    "The Eiffel Tower can be 15 cm taller during the summer due to thermal expansion! 🗼",
    "Sharks existed before trees! 🦈",
]
