# db/models.py
"""
Supabase does not require ORM model classes.
Objects this app relies on, created in the Supabase project:

Table: stores
- store_id (text, PK)
- name (text, nullable)

Table: staff
- staff_id (text, PK)
- store_id (text, FK → stores.store_id)
- display_name (text, nullable)

Table: slots
- slot_id (text, PK)
- store_id (text, FK → stores.store_id)
- staff_id (text, FK → staff.staff_id)
- start_at_utc (timestamptz)
- end_at_utc (timestamptz, > start_at_utc)
- status (text: 'open' | 'booked')

RPC: reserve_slot(p_slot_id, p_name, p_phone, p_email)
- Locks the slot row and flips it from 'open' to 'booked'.
- Raises (e.g. "slot already booked", "slot not found") otherwise.

RPC: generate_demo_slots(p_date date default today)
- Creates or refreshes one day of demo slots, returns the row count.

Edge Function: send-reservation-email
- Body: {to, name, phone, store_id, staff_id, start_at_jst, end_at_jst}
"""
