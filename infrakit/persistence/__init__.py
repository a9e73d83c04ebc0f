"""Cache drivers, serializers, single flight and the typed cache."""