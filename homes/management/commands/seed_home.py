"""
Load the demo home: users, rooms, devices, scenes and automations.

Safe to run more than once; existing records are left untouched.
"""
from datetime import timedelta

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils.timezone import now

from homes.models import Automation, Device, Room, Scene
from homes.state import HomeStateService

USERS = [
    ('admin@example.com', 'Admin User', 'admin'),
    ('jane.doe@example.com', 'Jane Doe', 'user'),
]

ROOMS = [
    ('Living Room', 22),
    ('Kitchen', 24),
    ('Bedroom', 20),
    ('Entrance', 23),
    ('Garden', 21),
]

# name, room, icon, category, active, status, variant, minutes since last change
DEVICES = [
    ('Living Room Lights', 'Living Room', 'Lightbulb', 'light', True, 'On', 'default', 2),
    ('Kitchen Lights', 'Kitchen', 'Lamp', 'light', False, 'Off', 'secondary', 5),
    ('Bedroom Lights', 'Bedroom', 'Lightbulb', 'light', True, 'On', 'default', 1),
    ('Front Door Lock', 'Entrance', 'Lock', 'lock', True, 'Locked', 'default', 10),
    ('Back Door Lock', 'Garden', 'Lock', 'lock', False, 'Unlocked', 'destructive', 15),
    ('Security Camera 1', 'Living Room', 'Camera', 'camera', True, 'Recording', 'default', 0),
    ('Security Camera 2', 'Kitchen', 'Camera', 'camera', True, 'Recording', 'default', 0),
    ('Living Room AC', 'Living Room', 'AirVent', 'ac', False, 'Off', 'secondary', 30),
    ('Bedroom AC', 'Bedroom', 'AirVent', 'ac', True, 'Cooling', 'default', 5),
    ('Smart Smoke Detector', 'Kitchen', 'Wind', 'security', True, 'Online', 'default', 0),
]

SCENES = [
    ('Good Morning', 'Gradually brighten lights and start your day.'),
    ('Movie Night', 'Dim the lights and set the mood for a movie.'),
    ('Focus Time', 'Bright, cool lighting to help you concentrate.'),
    ('Good Night', 'Turn off all lights and secure the house.'),
]

AUTOMATIONS = [
    ('Morning Routine', 'Turn on lights when motion detected after 6 AM',
     'Motion + Time', 'Turn on lights', True, 'This morning'),
    ('Energy Saver', 'Turn off lights when no motion for 10 minutes',
     'No motion', 'Turn off lights', True, '2 hours ago'),
    ('Security Mode', 'Lock doors and arm cameras at 11 PM',
     '11:00 PM', 'Lock & Arm', False, 'Yesterday'),
    ('Climate Control', 'Adjust temperature based on occupancy',
     'Occupancy change', 'Adjust AC', True, '1 hour ago'),
]


class Command(BaseCommand):
    help = 'Seed the demo home (users, rooms, devices, scenes, automations)'

    def add_arguments(self, parser):
        parser.add_argument('--admin-password', default='adminpass123',
                            help='Password for admin@example.com')
        parser.add_argument('--user-password', default='userpass123',
                            help='Password for jane.doe@example.com')

    def handle(self, *args, **options):
        passwords = {
            'admin': options['admin_password'],
            'user': options['user_password'],
        }

        with transaction.atomic():
            self.seed_users(passwords)
            rooms = self.seed_rooms()
            self.seed_devices(rooms)
            self.seed_scenes()
            self.seed_automations()
            HomeStateService(publish=False).recalculate_all_rooms()

        self.stdout.write(self.style.SUCCESS("✅ Demo home ready"))

    def seed_users(self, passwords):
        User = get_user_model()
        for email, name, role in USERS:
            if User.objects.filter(email__iexact=email).exists():
                self.stdout.write(f"ℹ️  User exists: {email}")
                continue
            User.objects.create_user(email=email, password=passwords[role], name=name, role=role)
            self.stdout.write(f"✅ User created: {email} ({role})")

    def seed_rooms(self):
        rooms = {}
        for name, temperature in ROOMS:
            room, created = Room.objects.get_or_create(name=name, defaults={'temperature': temperature})
            rooms[name] = room
            if created:
                self.stdout.write(f"✅ Room created: {name}")
        return rooms

    def seed_devices(self, rooms):
        if Device.objects.exists():
            self.stdout.write("ℹ️  Devices exist, skipping")
            return
        moment = now()
        for name, room, icon, category, active, status, variant, minutes in DEVICES:
            Device.objects.create(
                name=name,
                room=rooms[room],
                icon_name=icon,
                category=category,
                active=active,
                status=status,
                status_variant=variant,
                last_changed=moment - timedelta(minutes=minutes),
            )
        self.stdout.write(f"✅ {len(DEVICES)} devices created")

    def seed_scenes(self):
        if Scene.objects.exists():
            self.stdout.write("ℹ️  Scenes exist, skipping")
            return
        for name, description in SCENES:
            Scene.objects.create(name=name, description=description)
        self.stdout.write(f"✅ {len(SCENES)} scenes created")

    def seed_automations(self):
        if Automation.objects.exists():
            self.stdout.write("ℹ️  Automations exist, skipping")
            return
        for name, description, trigger, action, active, last_run in AUTOMATIONS:
            Automation.objects.create(
                name=name,
                description=description,
                trigger=trigger,
                action=action,
                active=active,
                status=Automation.STATUS_ACTIVE if active else Automation.STATUS_PAUSED,
                last_run=last_run,
            )
        self.stdout.write(f"✅ {len(AUTOMATIONS)} automations created")
