from os import getenv

# user can have only one reaction on the panel
PANEL_EXCLUSIVE_REACTIONS = getenv('PANEL_EXCLUSIVE_REACTIONS', '1') == '1'
# create panels only for replies to the bot's own messages
PANEL_REPLY_TO_BOT_ONLY = getenv('PANEL_REPLY_TO_BOT_ONLY', '0') == '1'
# json or compact
PANEL_PAYLOAD_FORMAT = getenv('PANEL_PAYLOAD_FORMAT', 'json')
# invisible character, message text can't be empty
PANEL_TEXT = getenv('PANEL_TEXT', '\u034f')
