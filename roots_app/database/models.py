"""
SQLAlchemy models for the Roots genealogical record system

Table and column names match the relational schema the existing data was
written against, so each model keeps the original (capitalised) table name.
"""

import enum
import time

from . import db


def epoch_now() -> int:
    """Current time as integer epoch seconds, the unit of every BIGINT timestamp column"""
    return int(time.time())


class EmailConfirmation(enum.Enum):
    """Confirmation state of a user's email address"""
    UNCONFIRMED = 'unconfirmed'
    CONFIRMED = 'confirmed'


class PasswordResetState(enum.Enum):
    """State of a user's password reset request"""
    NONE = 'none'
    PENDING = 'pending'


class Individual(db.Model):
    """Profile of a person in the genealogical database"""
    __tablename__ = 'Individual'

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)

    # Birth
    date_of_birth = db.Column(db.Date)
    municipality_of_birth = db.Column(db.String(128))
    state_of_birth = db.Column(db.String(64))
    country_of_birth = db.Column(db.String(64))

    # Death, NULL date while the person is living
    date_of_death = db.Column(db.Date)
    municipality_of_death = db.Column(db.String(128))
    state_of_death = db.Column(db.String(64))
    country_of_death = db.Column(db.String(64))

    gender = db.Column(db.String(64))
    bio = db.Column(db.String(5000))
    image = db.Column(db.Integer)  # Reference number of the profile image
    created_at = db.Column('create_at', db.BigInteger, default=epoch_now)
    private = db.Column(db.Boolean, default=False)

    # Owned records
    names = db.relationship('Name', back_populates='individual', order_by='Name.id')
    images = db.relationship('Image', back_populates='individual', order_by='Image.id')
    occupations = db.relationship('Occupation', back_populates='individual', order_by='Occupation.id')

    @property
    def is_living(self):
        return self.date_of_death is None

    @property
    def current_name(self):
        """The open-ended name, if any"""
        return next((name for name in self.names if name.date_to is None), None)

    @property
    def display_name(self):
        name = self.current_name
        if name is None and self.names:
            name = self.names[-1]
        return name.full_name if name else f'Individual {self.id}'

    def __repr__(self):
        return f'<Individual {self.id}>'


class Image(db.Model):
    """Image associated with an Individual"""
    __tablename__ = 'Image'

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    individual_id = db.Column(db.Integer, db.ForeignKey('Individual.id'), nullable=False)
    url = db.Column(db.Text)

    individual = db.relationship('Individual', back_populates='images')

    def __repr__(self):
        return f'<Image {self.url}>'


class Name(db.Model):
    """A name held by an Individual during an interval of time"""
    __tablename__ = 'Name'

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    individual_id = db.Column(db.Integer, db.ForeignKey('Individual.id'), nullable=False)
    first_name = db.Column(db.String(256), nullable=False)
    middle_name = db.Column(db.String(256))
    last_name = db.Column(db.String(256), nullable=False)
    suffix = db.Column(db.String(256))  # Jr, II, ...
    reason_for_change = db.Column(db.String(256))  # marriage, adoption, ...
    date_from = db.Column(db.Date)
    date_to = db.Column(db.Date)

    individual = db.relationship('Individual', back_populates='names')

    @property
    def is_current(self):
        return self.date_to is None

    @property
    def full_name(self):
        parts = [self.first_name, self.middle_name, self.last_name]
        name = " ".join(filter(None, parts))
        if self.suffix:
            name = f"{name} {self.suffix}"
        return name

    def __repr__(self):
        return f'<Name {self.full_name}>'


class Occupation(db.Model):
    """A period of employment of an Individual"""
    __tablename__ = 'Occupation'

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    individual_id = db.Column(db.Integer, db.ForeignKey('Individual.id'), nullable=False)
    occupation = db.Column(db.String(256), nullable=False)
    occupation_start = db.Column(db.Date)
    occupation_end = db.Column(db.Date)
    employer = db.Column(db.String(256))
    country = db.Column(db.String(256))
    state = db.Column(db.String(256))
    municipality = db.Column(db.String(256))

    individual = db.relationship('Individual', back_populates='occupations')

    def __repr__(self):
        return f'<Occupation {self.occupation}>'


class ParentOf(db.Model):
    """Directed parent -> child edge"""
    __tablename__ = 'Parent_of'

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    parent_id = db.Column(db.Integer, db.ForeignKey('Individual.id'), nullable=False)
    child_id = db.Column(db.Integer, db.ForeignKey('Individual.id'), nullable=False)

    parent = db.relationship('Individual', foreign_keys=[parent_id])
    child = db.relationship('Individual', foreign_keys=[child_id])

    __table_args__ = (
        db.Index('idx_parent_of_parent', 'parent_id'),
        db.Index('idx_parent_of_child', 'child_id'),
    )

    def __repr__(self):
        return f'<ParentOf {self.parent_id} -> {self.child_id}>'


class MarriedTo(db.Model):
    """Marriage between two Individuals; the second spouse may be unknown"""
    __tablename__ = 'Married_to'

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    spouse_1_id = db.Column(db.Integer, db.ForeignKey('Individual.id'), nullable=False)
    spouse_2_id = db.Column(db.Integer, db.ForeignKey('Individual.id'))
    marriage_date = db.Column(db.Date, nullable=False)
    marriage_end_date = db.Column(db.Date)
    reason_for_end = db.Column(db.String(256))  # death, divorce, annulment

    spouse_1 = db.relationship('Individual', foreign_keys=[spouse_1_id])
    spouse_2 = db.relationship('Individual', foreign_keys=[spouse_2_id])

    @property
    def is_ongoing(self):
        return self.marriage_end_date is None

    def spouse_of(self, individual_id):
        """Id of the other spouse, None when unknown"""
        if individual_id == self.spouse_1_id:
            return self.spouse_2_id
        return self.spouse_1_id

    def __repr__(self):
        return f'<MarriedTo {self.spouse_1_id} & {self.spouse_2_id}>'


class SiblingTo(db.Model):
    """Sibling edge, symmetric when read"""
    __tablename__ = 'Sibling_to'

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    sibling_1_id = db.Column(db.Integer, db.ForeignKey('Individual.id'), nullable=False)
    sibling_2_id = db.Column(db.Integer, db.ForeignKey('Individual.id'), nullable=False)

    sibling_1 = db.relationship('Individual', foreign_keys=[sibling_1_id])
    sibling_2 = db.relationship('Individual', foreign_keys=[sibling_2_id])

    def sibling_of(self, individual_id):
        if individual_id == self.sibling_1_id:
            return self.sibling_2_id
        return self.sibling_1_id

    def __repr__(self):
        return f'<SiblingTo {self.sibling_1_id} & {self.sibling_2_id}>'


class User(db.Model):
    """Administrative site account, distinct from a person's genealogical profile"""
    __tablename__ = 'User'

    email = db.Column(db.String(100), primary_key=True)
    password = db.Column(db.String(255), nullable=False)  # Salted hash, never plain text
    individual_id = db.Column(db.Integer, db.ForeignKey('Individual.id'))

    # NULL code means the address is confirmed; read email_state instead
    email_confirm_code = db.Column(db.String(32))
    password_reset = db.Column(db.String(32))
    password_reset_issued = db.Column(db.BigInteger)
    email_confirm = db.Column(db.Boolean, default=False)

    # Login throttling, mutated only by AccountService.login
    login_count = db.Column(db.Integer, default=0)
    first_failed_login = db.Column(db.BigInteger)
    timestamp = db.Column(db.BigInteger)  # Last successful login
    cooldown = db.Column(db.BigInteger)  # Logins rejected until this time

    profile_complete = db.Column(db.Boolean, default=False)

    individual = db.relationship('Individual')

    @property
    def email_state(self) -> EmailConfirmation:
        if self.email_confirm:
            return EmailConfirmation.CONFIRMED
        return EmailConfirmation.UNCONFIRMED

    def password_reset_state(self, now: int, ttl: int | None = None) -> PasswordResetState:
        """Reset state at time `now`; a token older than `ttl` seconds counts as expired"""
        if self.password_reset is None:
            return PasswordResetState.NONE
        if ttl is not None and self.password_reset_issued is not None:
            if now - self.password_reset_issued >= ttl:
                return PasswordResetState.NONE
        return PasswordResetState.PENDING

    def is_cooling_down(self, now: int) -> bool:
        return self.cooldown is not None and now < self.cooldown

    def __repr__(self):
        return f'<User {self.email}>'


class FormerCountry(db.Model):
    """Country that no longer exists, mapped to its modern-day counterpart"""
    __tablename__ = 'Former_countries'

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    name = db.Column(db.String(64), nullable=False)
    date_from = db.Column(db.Date, nullable=False)
    date_to = db.Column(db.Date, nullable=False)
    modern_location = db.Column(db.String(64), nullable=False)

    __table_args__ = (
        db.Index('idx_former_countries_name', 'name'),
    )

    def covers(self, on_date):
        """Whether the country existed on the given date"""
        return self.date_from <= on_date <= self.date_to

    def __repr__(self):
        return f'<FormerCountry {self.name} -> {self.modern_location}>'
