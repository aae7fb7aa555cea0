from weighin import db


class ScoreRecord(db.Model):
    __tablename__ = 'leaderboard'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), unique=True, nullable=False, index=True)
    score = db.Column(db.Float, nullable=False)

    def to_dict(self):
        return {
            'name': self.name,
            'score': self.score,
        }

    def __repr__(self):
        return f'<ScoreRecord {self.name}={self.score}>'
