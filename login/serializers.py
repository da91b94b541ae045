# login/serializers.py
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer
from rest_framework import serializers
from django.contrib.auth import get_user_model
from django.contrib.auth import password_validation
from django.core.exceptions import ValidationError as DjangoValidationError


User = get_user_model()


class CustomTokenSerializer(TokenObtainPairSerializer):
    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        token["role"] = user.role
        token["email"] = user.email
        return token

    def validate(self, attrs):
        data = super().validate(attrs)
        data["user"] = UserSerializer(self.user).data
        return data


class UserSerializer(serializers.ModelSerializer):
    name = serializers.SerializerMethodField()
    employee_id = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ('id', 'email', 'username', 'first_name',
                  'last_name', 'name', 'role', 'employee_id')

    def get_name(self, obj):
        return obj.get_full_name() or obj.username

    def get_employee_id(self, obj):
        employee = getattr(obj, "employee", None)
        return employee.id if employee else None


class RegisterSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True, min_length=6)
    role = serializers.ChoiceField(choices=User.ROLE_CHOICES)

    class Meta:
        model = User
        fields = ('id', 'email', 'username', 'first_name',
                  'last_name', 'role', 'password')
        extra_kwargs = {'username': {'required': False}}

    def validate_email(self, value):
        email = value.lower()
        if User.objects.filter(email__iexact=email).exists():
            raise serializers.ValidationError(
                "User with this email already exists.")
        return email

    def validate_password(self, value):
        try:
            password_validation.validate_password(value, user=None)
        except DjangoValidationError as e:
            raise serializers.ValidationError(list(e.messages))
        return value

    def create(self, validated_data):
        password = validated_data.pop("password")
        if not validated_data.get("username"):
            validated_data["username"] = validated_data["email"]
        user = User(**validated_data)
        user.set_password(password)
        user.save()
        return user


class UserAdminSerializer(serializers.ModelSerializer):
    """System-admin view of an account and its linked employee."""
    name = serializers.SerializerMethodField()
    employee = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ('id', 'email', 'username', 'first_name', 'last_name',
                  'name', 'role', 'is_active', 'date_joined', 'employee')
        read_only_fields = ('email', 'username', 'is_active', 'date_joined')

    def get_name(self, obj):
        return obj.get_full_name() or obj.username

    def get_employee(self, obj):
        employee = getattr(obj, "employee", None)
        if employee is None:
            return None
        return {
            "id": employee.id,
            "employee_code": employee.employee_code,
            "full_name": employee.full_name(),
            "position": employee.position,
            "department": employee.department.name,
            "status": employee.status,
        }


class UserStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=('active', 'inactive'))
