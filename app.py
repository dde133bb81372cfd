"""
Watch Party - console client

Connects to a multiplayer server, creates or joins a room and relays
what is typed on stdin: plain lines go to the room chat, slash commands
drive playback and episode sync.
"""

import argparse
import logging
import sys

from config.settings import LOG_LEVEL, MULTIPLAYER_SERVER_URL
from multiplayer import MultiplayerClient
from multiplayer.navigation import room_from_location

# Configure logging
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

HELP = """Commands:
  /play [seconds]        broadcast play (host only)
  /pause [seconds]       broadcast pause (host only)
  /seek <seconds>        broadcast seek (host only)
  /episode <anime> <ep>  switch the room to an episode (host only)
  /status                show room status
  /leave                 leave the room and quit
  anything else          chat message"""

def print_chat(entry):
    prefix = '*' if entry.is_system else f"{entry.nickname}:"
    print(f"{prefix} {entry.message}")

def print_navigation(intent):
    print(f"-> {'location is now' if intent.replace else 'go to'} {intent.url}")

def print_video_action(action):
    print(f"-> player: {action}")

def handle_command(client, line):
    """Run one slash command. Returns False when the client should exit."""
    parts = line.split()
    command, args = parts[0], parts[1:]

    if command in ('/play', '/pause'):
        action = {'type': command[1:]}
        if args:
            action['time'] = float(args[0])
        success, message = client.sync_video_action(action)
    elif command == '/seek' and len(args) == 1:
        success, message = client.sync_video_action({'type': 'seek', 'time': float(args[0])})
    elif command == '/episode' and len(args) == 2:
        success, message = client.sync_episode_change(args[1], args[0])
    elif command == '/status':
        status = client.room_status()
        if status:
            print(f"{status['headline']} - {status['subline']}{' (host)' if status['is_host'] else ''}")
            for member in client.members:
                print(f"  {member.nickname}")
        else:
            print("Not in a room")
        return True
    elif command == '/leave':
        client.leave_room()
        return False
    else:
        print(HELP)
        return True

    if not success:
        print(f"! {message}")
    return True

def run(client, room_code=None):
    success, message = client.start()
    if not success:
        logger.error(message)
        return 1

    client.chat.add_listener(print_chat)
    client.set_navigation_handler(print_navigation)
    client.set_player_reference(print_video_action)

    if room_code:
        success, message = client.join_room(room_code)
    else:
        success, message = client.create_room()
    if not success:
        logger.error(message)
        client.stop()
        return 1

    print(HELP)
    try:
        for line in sys.stdin:
            line = line.strip()
            if not client.is_connected:
                print("! Connection lost")
                return 1
            if client.room_error:
                print(f"! {client.room_error}")
            if not line:
                continue
            if line.startswith('/'):
                try:
                    if not handle_command(client, line):
                        break
                except ValueError:
                    print(HELP)
            else:
                success, message = client.send_chat_message(line)
                if not success:
                    print(f"! {message}")
    except KeyboardInterrupt:
        pass
    finally:
        client.stop()
    return 0

def main(argv=None):
    parser = argparse.ArgumentParser(description="Watch together from the console")
    parser.add_argument('--server', default=MULTIPLAYER_SERVER_URL, help="multiplayer server URL")
    parser.add_argument('--nickname', help="display name (default: Guest-NNNN)")
    parser.add_argument('--room', help="room code to join (default: create a room)")
    parser.add_argument('--location', default='/', help="current watch location")
    args = parser.parse_args(argv)

    client = MultiplayerClient(endpoint=args.server, nickname=args.nickname, location=args.location)
    return run(client, args.room or room_from_location(args.location))

if __name__ == "__main__":
    sys.exit(main())
