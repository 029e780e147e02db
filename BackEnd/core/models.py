from dataclasses import dataclass, replace


@dataclass(frozen=True)
class User:
	id: str
	name: str
	email: str
	avatar: str
	total_seconds: int = 0

	@property
	def total_hours(self) -> float:
		return self.total_seconds / 3600

	def with_added_seconds(self, seconds: int) -> "User":
		return replace(self, total_seconds=self.total_seconds + int(seconds))

	def to_dict(self):
		return {
			"id": self.id,
			"name": self.name,
			"email": self.email,
			"avatar": self.avatar,
			"totalSeconds": self.total_seconds,
		}

	@classmethod
	def from_dict(cls, data):
		return cls(
			id=data["id"],
			name=data.get("name", ""),
			email=data["email"],
			avatar=data.get("avatar", ""),
			total_seconds=int(data.get("totalSeconds", 0) or 0),
		)


@dataclass(frozen=True)
class StudySession:
	"""A finished, immutable study session. Instants are epoch milliseconds."""
	id: str
	user_id: str
	start_time: int
	end_time: int
	duration_seconds: int
	subject: str
	notes: str = ""

	def to_dict(self):
		return {
			"id": self.id,
			"userId": self.user_id,
			"startTime": self.start_time,
			"endTime": self.end_time,
			"durationSeconds": self.duration_seconds,
			"subject": self.subject,
			"notes": self.notes,
		}

	@classmethod
	def from_dict(cls, data):
		return cls(
			id=data["id"],
			user_id=data["userId"],
			start_time=int(data["startTime"]),
			end_time=int(data["endTime"]),
			duration_seconds=int(data["durationSeconds"]),
			subject=data.get("subject", ""),
			notes=data.get("notes", "") or "",
		)
