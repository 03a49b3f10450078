"""User-facing bot texts."""

FROZEN = "⚠️ Stand-up collection is frozen. Your answers are no longer accepted today."
START_FROZEN = (
    "⚠️ Stand-up collection is frozen. "
    "You can no longer start or change your answers today."
)
GREETING = "Hello {name} 👋, let's start your stand-up.\nI'll ask you a few quick questions."
ACK = "Thanks, noted."
COMPLETED = "Got it, {name} ✅ Your daily update is complete.\nHave a great day!"
SESSION_EXPIRED = "⚠️ A new stand-up has started since you began. Send /start to answer again."

STATUS = "Status: {status} | Date: {date} | Responses: {count}"

FREEZE_MISSING = "🧊 Collection frozen.\n> ⚠️ No answer from: {names}"
FREEZE_COMPLETE = "🧊 Collection frozen. Every member answered."
FREEZE_REMINDER = (
    "⏰ Hello {name}, today's stand-up collection is **frozen**. "
    "You did not finish your answers. Please complete them at the next stand-up."
)

GENERAL_SET = "✅ General channel saved (this conversation)."
GENERAL_CLEARED = "🗑️ General channel cleared."
GENERAL_MISSING = (
    "⚠️ No general channel saved. "
    "Open the channel conversation and send `/setgeneral` there."
)
DIGEST_POSTED = "📣 Digest posted to the general channel."

AS_USAGE = "Usage: /as <name> [<id>]"
AS_SET = "✅ Identity for this conversation: **{name}** ({id})."
WHOAMI = "You are **{name}** (id: `{id}`) in this conversation."
AS_CLEARED = "🗑️ Identity override removed for this conversation."

HELP = "\n".join(
    [
        "Commands:",
        "• /start or /standup – start the guided stand-up (one question at a time)",
        "• /status – show the stand-up status",
        "• /freeze – freeze the collection",
        "• /digest – show the summarized digest (/digest full for the raw one)",
        "• /setgeneral, /cleargeneral – save or clear the general channel",
        "• /digestpost – post the digest to the general channel",
        "• /as <name> [<id>], /whoami, /clearas – simulate another member here",
    ]
)
